# backend/homeprojects/services/photos/lifecycle.py
from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Optional

from homeprojects.errors import MissingFileError, NotFoundError
from homeprojects.models.photo import Photo
from homeprojects.services.blobs.store import BlobStore
from homeprojects.services.catalog.photos import PhotoCatalog
from homeprojects.services.images.normalize import (
    STORED_EXTENSION,
    ImageLimits,
    normalize,
    validate_upload,
)

logger = logging.getLogger("homeprojects.photos")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _now_millis() -> int:
    return int(time.time() * 1000)


def stored_filename(slot_id: str, millis: int, suffix: Optional[str] = None) -> str:
    """<slot>-<millis>.jpg（ファイル名に使えない文字は _ に置換）"""
    base = _UNSAFE_CHARS.sub("_", slot_id) or "slot"
    if suffix:
        return f"{base}-{millis}-{suffix}.{STORED_EXTENSION}"
    return f"{base}-{millis}.{STORED_EXTENSION}"


class PhotoService:
    """Upload / delete orchestration across the catalog and the blob store."""

    def __init__(
        self,
        catalog: PhotoCatalog,
        blobs: BlobStore,
        limits: ImageLimits,
        clock: Callable[[], int] = _now_millis,
    ):
        self.catalog = catalog
        self.blobs = blobs
        self.limits = limits
        self.clock = clock

    def _store_blob(self, slot_id: str, data: bytes) -> str:
        # 既存ファイルがあれば作成に失敗するので、乱数サフィックスを付けて再試行
        name = stored_filename(slot_id, self.clock())
        while True:
            try:
                self.blobs.create(data, name)
                return name
            except FileExistsError:
                name = stored_filename(slot_id, self.clock(), uuid.uuid4().hex[:6])

    def upload(
        self,
        slot_id: str,
        data: Optional[bytes],
        content_type: Optional[str],
        original_name: Optional[str],
    ) -> Photo:
        if not data:
            raise MissingFileError()
        validate_upload(content_type, len(data), self.limits)

        # 正規化が成功してから書き込む（失敗時はファイルを残さない）
        normalized = normalize(data, self.limits)

        filename = self._store_blob(slot_id, normalized)
        photo = self.catalog.insert(slot_id, filename, original_name)
        logger.info(
            "Stored photo %s for slot %r (%d -> %d bytes)",
            filename, slot_id, len(data), len(normalized),
        )
        return photo

    def delete(self, photo_id: int) -> None:
        """
        ファイル名解決 → ファイル削除（無くても可）→ カタログ行削除 の順。
        途中で落ちてもカタログ行だけが残り、次回の削除で回復する。
        """
        photo = self.catalog.get(photo_id)
        if photo is None:
            raise NotFoundError("Photo not found")
        filename = photo.filename
        removed = self.blobs.delete(filename)
        if not removed:
            logger.warning("Photo %s had no file on disk (%s)", photo_id, filename)
        if not self.catalog.delete(photo_id):
            raise NotFoundError("Photo not found")
        logger.info("Deleted photo %s (%s)", photo_id, filename)
