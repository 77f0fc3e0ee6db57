# backend/homeprojects/schemas/progress.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class PhotoOut(BaseModel):
    id: int
    filename: str
    originalName: Optional[str] = None
    uploadedAt: Optional[str] = None


class UploadedPhotoOut(BaseModel):
    id: int
    filename: str
    originalName: Optional[str] = None


class PhotoUploadOut(BaseModel):
    success: bool = True
    photo: UploadedPhotoOut


class ProgressOut(BaseModel):
    checklist: Dict[str, bool] = Field(default_factory=dict)
    notes: Dict[str, str] = Field(default_factory=dict)
    statuses: Dict[str, str] = Field(default_factory=dict)
    photos: Dict[str, List[PhotoOut]] = Field(default_factory=dict)
