# backend/homeprojects/api/routers/records.py
from fastapi import APIRouter, Depends

from homeprojects.deps import get_records
from homeprojects.schemas.records import ChecklistIn, NoteIn, StatusIn, SuccessOut
from homeprojects.services.records.store import RecordDomain, RecordStore

router = APIRouter()


@router.post("/checklist/{item_id}")
def update_checklist(item_id: str, payload: ChecklistIn, records: RecordStore = Depends(get_records)) -> SuccessOut:
    records.upsert(RecordDomain.CHECKLIST, item_id, payload.checked)
    return SuccessOut()


@router.post("/notes/{note_id}")
def update_note(note_id: str, payload: NoteIn, records: RecordStore = Depends(get_records)) -> SuccessOut:
    records.upsert(RecordDomain.NOTES, note_id, payload.content)
    return SuccessOut()


@router.post("/status/{project_id}")
def update_status(project_id: str, payload: StatusIn, records: RecordStore = Depends(get_records)) -> SuccessOut:
    records.upsert(RecordDomain.STATUS, project_id, payload.status)
    return SuccessOut()
