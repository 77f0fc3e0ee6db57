# backend/homeprojects/services/images/normalize.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from PIL import Image, ImageOps

from homeprojects.config import ALLOWED_CONTENT_TYPES, Settings
from homeprojects.errors import (
    MissingFileError,
    NormalizationError,
    PayloadTooLargeError,
    UnsupportedMediaError,
)

logger = logging.getLogger("homeprojects.images")

STORED_EXTENSION = "jpg"


@dataclass(frozen=True)
class ImageLimits:
    max_bytes: int = 10 * 1024 * 1024
    allowed_types: FrozenSet[str] = field(default_factory=lambda: frozenset(ALLOWED_CONTENT_TYPES))
    max_dimension: int = 1920
    quality: int = 85

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageLimits":
        return cls(
            max_bytes=settings.max_upload_bytes,
            allowed_types=frozenset(t.lower() for t in settings.allowed_content_types),
            max_dimension=settings.max_dimension,
            quality=settings.jpeg_quality,
        )


def validate_upload(content_type: Optional[str], size: int, limits: ImageLimits) -> None:
    """Reject an upload by declared type and size before any decoding happens."""
    if size <= 0:
        raise MissingFileError()
    # "image/jpeg; charset=..." のようなパラメータは無視
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if mime not in limits.allowed_types:
        raise UnsupportedMediaError()
    if size > limits.max_bytes:
        raise PayloadTooLargeError(f"File too large (max {limits.max_bytes // (1024 * 1024)}MB)")


def normalize(raw: bytes, limits: ImageLimits) -> bytes:
    """
    向き補正 → 長辺 max_dimension 以内に縮小（拡大はしない）→ JPEG(quality) 再エンコード。
    ディスクには書かない。失敗時は NormalizationError。
    """
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            # EXIF Orientation に従って回転
            out = ImageOps.exif_transpose(img)
            # thumbnail は縦横比を保ち、元画像より大きくはしない
            out.thumbnail((limits.max_dimension, limits.max_dimension), Image.Resampling.LANCZOS)
            if out.mode != "RGB":
                out = out.convert("RGB")
            buf = io.BytesIO()
            out.save(buf, format="JPEG", quality=limits.quality)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        logger.warning("Image normalization failed: %s", e)
        raise NormalizationError() from e
    return buf.getvalue()
