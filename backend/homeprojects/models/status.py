# backend/homeprojects/models/status.py
from sqlalchemy import Column, DateTime, String
from .base import Base, utcnow

DEFAULT_STATUS = "pending"

class ProjectStatus(Base):
    __tablename__ = "project_status"
    id = Column(String, primary_key=True)
    status = Column(String, nullable=False, default=DEFAULT_STATUS)  # pending|in-progress|done など（自由文字列）
    updated_at = Column(DateTime, nullable=False, default=utcnow)
