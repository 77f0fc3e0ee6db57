# backend/homeprojects/models/photo.py
from sqlalchemy import Column, DateTime, Index, Integer, String
from .base import Base, utcnow

class Photo(Base):
    __tablename__ = "photos"
    id = Column(Integer, primary_key=True, autoincrement=True)
    slot_id = Column(String, nullable=False)
    filename = Column(String, nullable=False, unique=True)  # uploads/ 配下のファイル名
    original_name = Column(String, nullable=True)  # クライアント申告値（信用しない）
    uploaded_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("ix_photos_slot_uploaded", "slot_id", "uploaded_at"),)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "originalName": self.original_name,
            "uploadedAt": self.uploaded_at.isoformat() if self.uploaded_at else None,
        }
