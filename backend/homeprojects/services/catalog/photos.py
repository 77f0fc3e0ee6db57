# backend/homeprojects/services/catalog/photos.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homeprojects.errors import StoreError
from homeprojects.models.photo import Photo

logger = logging.getLogger("homeprojects.catalog")


class PhotoCatalog:
    """Metadata index over stored photo files. Never touches the files themselves."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, slot_id: str, filename: str, original_name: Optional[str]) -> Photo:
        obj = Photo(slot_id=slot_id, filename=filename, original_name=original_name)
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)  # id / uploaded_at 採番
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to insert photo %s for slot %r", filename, slot_id)
            raise StoreError("Failed to save photo") from e
        return obj

    def get(self, photo_id: int) -> Optional[Photo]:
        try:
            return self.db.get(Photo, photo_id)
        except SQLAlchemyError as e:
            logger.exception("Failed to load photo %s", photo_id)
            raise StoreError("Failed to load photo") from e

    def list_by_slot(self, slot_id: str) -> List[Photo]:
        # 古い順（エクスポート用）
        try:
            return (
                self.db.query(Photo)
                .filter(Photo.slot_id == slot_id)
                .order_by(Photo.uploaded_at.asc(), Photo.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to list photos for slot %r", slot_id)
            raise StoreError("Failed to list photos") from e

    def list_grouped_by_slot(self) -> Dict[str, List[Photo]]:
        # 新しい順で1回だけ走査し、スロットごとに振り分ける
        try:
            rows = self.db.query(Photo).order_by(Photo.uploaded_at.desc(), Photo.id.desc()).all()
        except SQLAlchemyError as e:
            logger.exception("Failed to list photos")
            raise StoreError("Failed to list photos") from e
        grouped: Dict[str, List[Photo]] = {}
        for p in rows:
            grouped.setdefault(p.slot_id, []).append(p)
        return grouped

    def delete(self, photo_id: int) -> bool:
        try:
            n = self.db.query(Photo).filter(Photo.id == photo_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to delete photo %s", photo_id)
            raise StoreError("Failed to delete photo") from e
        return n > 0
