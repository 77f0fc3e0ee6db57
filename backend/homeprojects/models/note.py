# backend/homeprojects/models/note.py
from sqlalchemy import Column, DateTime, String, Text
from .base import Base, utcnow

class Note(Base):
    __tablename__ = "notes"
    id = Column(String, primary_key=True)
    content = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, nullable=False, default=utcnow)
