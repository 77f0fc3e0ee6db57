# backend/homeprojects/schemas/records.py
from pydantic import BaseModel


class ChecklistIn(BaseModel):
    checked: bool = False


class NoteIn(BaseModel):
    content: str = ""


class StatusIn(BaseModel):
    status: str = "pending"


class SuccessOut(BaseModel):
    success: bool = True
