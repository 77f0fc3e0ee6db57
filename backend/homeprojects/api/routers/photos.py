# backend/homeprojects/api/routers/photos.py
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse

from homeprojects.deps import get_exporter, get_photos
from homeprojects.errors import MissingFileError, NotFoundError
from homeprojects.schemas.progress import PhotoUploadOut, UploadedPhotoOut
from homeprojects.schemas.records import SuccessOut
from homeprojects.services.export.archive import ArchiveExporter
from homeprojects.services.photos.lifecycle import PhotoService

router = APIRouter()


@router.post("/{slot_id}")
def upload_photo(
    slot_id: str,
    photo: Optional[UploadFile] = File(None),
    photos: PhotoService = Depends(get_photos),
) -> PhotoUploadOut:
    if photo is None:
        raise MissingFileError()
    # 上限+1 バイトまでしか読まない（超過判定用）
    data = photo.file.read(photos.limits.max_bytes + 1)
    obj = photos.upload(slot_id, data, photo.content_type, photo.filename)
    return PhotoUploadOut(
        photo=UploadedPhotoOut(id=obj.id, filename=obj.filename, originalName=obj.original_name),
    )


@router.delete("/{photo_id}")
def delete_photo(photo_id: str, photos: PhotoService = Depends(get_photos)) -> SuccessOut:
    # 数値でない id は存在しない写真として扱う
    if not (photo_id.isascii() and photo_id.isdigit()):
        raise NotFoundError("Photo not found")
    photos.delete(int(photo_id))
    return SuccessOut()


@router.get("/{slot_id}/download")
def download_slot_photos(slot_id: str, exporter: ArchiveExporter = Depends(get_exporter)):
    # 0件なら NotFoundError（ヘッダ送信前に確定）
    archive = exporter.export_slot(slot_id)
    headers = {"Content-Disposition": archive.content_disposition}
    return StreamingResponse(archive.chunks(), media_type=archive.media_type, headers=headers)
