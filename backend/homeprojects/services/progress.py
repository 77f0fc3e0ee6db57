# backend/homeprojects/services/progress.py
from __future__ import annotations

from typing import Any, Dict

from homeprojects.services.catalog.photos import PhotoCatalog
from homeprojects.services.records.store import RecordDomain, RecordStore


class ProgressAggregator:
    """Checklist / notes / statuses + photos, read fresh on every call."""

    def __init__(self, records: RecordStore, catalog: PhotoCatalog):
        self.records = records
        self.catalog = catalog

    def snapshot(self) -> Dict[str, Any]:
        grouped = self.catalog.list_grouped_by_slot()
        return {
            "checklist": self.records.get_all(RecordDomain.CHECKLIST),
            "notes": self.records.get_all(RecordDomain.NOTES),
            "statuses": self.records.get_all(RecordDomain.STATUS),
            "photos": {slot: [p.to_dict() for p in photos] for slot, photos in grouped.items()},
        }
