# backend/homeprojects/api/routers/progress.py
from fastapi import APIRouter, Depends

from homeprojects.deps import get_progress
from homeprojects.schemas.progress import ProgressOut
from homeprojects.services.progress import ProgressAggregator

router = APIRouter()


@router.get("")
def get_all_progress(progress: ProgressAggregator = Depends(get_progress)) -> ProgressOut:
    return ProgressOut(**progress.snapshot())
