# backend/homeprojects/models/base.py
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # SQLite には naive UTC で保存する
    return datetime.now(timezone.utc).replace(tzinfo=None)
