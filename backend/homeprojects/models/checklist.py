# backend/homeprojects/models/checklist.py
from sqlalchemy import Boolean, Column, DateTime, String
from .base import Base, utcnow

class ChecklistItem(Base):
    __tablename__ = "checklist_items"
    id = Column(String, primary_key=True)
    checked = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
