# backend/homeprojects/services/records/store.py
from __future__ import annotations

import enum
import logging
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homeprojects.errors import StoreError
from homeprojects.models.base import utcnow
from homeprojects.models.checklist import ChecklistItem
from homeprojects.models.note import Note
from homeprojects.models.status import DEFAULT_STATUS, ProjectStatus

logger = logging.getLogger("homeprojects.records")


class RecordDomain(str, enum.Enum):
    CHECKLIST = "checklist"
    NOTES = "notes"
    STATUS = "status"


# domain → (モデル, 値カラム名)
_TABLES = {
    RecordDomain.CHECKLIST: (ChecklistItem, "checked"),
    RecordDomain.NOTES: (Note, "content"),
    RecordDomain.STATUS: (ProjectStatus, "status"),
}

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _coerce(domain: RecordDomain, value: Any) -> Any:
    if domain is RecordDomain.CHECKLIST:
        return bool(value)
    if domain is RecordDomain.NOTES:
        return "" if value is None else str(value)
    return DEFAULT_STATUS if value is None else str(value)


class RecordStore:
    """Key → value rows for the checklist / notes / status domains."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, domain: RecordDomain | str) -> Dict[str, Any]:
        domain = RecordDomain(domain)
        model, column = _TABLES[domain]
        try:
            rows = self.db.execute(select(model.id, getattr(model, column))).all()
        except SQLAlchemyError as e:
            logger.exception("Failed to read %s records", domain.value)
            raise StoreError(f"Failed to read {domain.value}") from e
        return {row[0]: _coerce(domain, row[1]) for row in rows}

    def upsert(self, domain: RecordDomain | str, record_id: str, value: Any) -> None:
        """
        INSERT ... ON CONFLICT(id) DO UPDATE の1文で書き込む。
        read-then-write にしないので同一 id の行が2つになることはない。
        """
        domain = RecordDomain(domain)
        model, column = _TABLES[domain]
        value = _coerce(domain, value)
        now = utcnow()

        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise StoreError(f"Unsupported database dialect: {dialect}")

        stmt = insert(model).values({"id": record_id, column: value, "updated_at": now})
        stmt = stmt.on_conflict_do_update(
            index_elements=[model.id],
            set_={column: value, "updated_at": now},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to upsert %s record %r", domain.value, record_id)
            raise StoreError(f"Failed to update {domain.value}") from e
