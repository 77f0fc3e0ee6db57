# backend/homeprojects/services/export/archive.py
from __future__ import annotations

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, List, Optional

from homeprojects.errors import ArchiveError, NotFoundError
from homeprojects.services.blobs.store import BlobStore
from homeprojects.services.catalog.photos import PhotoCatalog
from homeprojects.services.images.normalize import STORED_EXTENSION

logger = logging.getLogger("homeprojects.export")


@dataclass(frozen=True)
class ArchiveEntry:
    arcname: str
    path: Path


class _ChunkSink(io.RawIOBase):
    """Non-seekable write target for ZipFile; collects bytes until drained."""

    def __init__(self):
        super().__init__()
        self._chunks: List[bytes] = []

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        data = bytes(b)
        self._chunks.append(data)
        return len(data)

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


def iter_zip(entries: List[ArchiveEntry], compresslevel: int = 5) -> Iterator[bytes]:
    """
    ZIP を1エントリずつ組み立て、書けた分だけ yield する。
    途中で消えたファイルはスキップ。その他の失敗は ArchiveError。
    """
    sink = _ChunkSink()
    try:
        # 非シーク出力なので ZipFile はデータディスクリプタ形式で書く
        with zipfile.ZipFile(sink, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel) as zf:
            for entry in entries:
                try:
                    zf.write(entry.path, arcname=entry.arcname)
                except FileNotFoundError:
                    logger.warning("Skipping missing file %s", entry.path)
                    continue
                data = sink.drain()
                if data:
                    yield data
    except (OSError, zipfile.BadZipFile, zlib.error, ValueError) as e:
        logger.exception("Archive construction failed")
        raise ArchiveError() from e
    # セントラルディレクトリ
    data = sink.drain()
    if data:
        yield data


@dataclass
class SlotArchive:
    filename: str
    entries: List[ArchiveEntry] = field(default_factory=list)
    compresslevel: int = 5

    media_type = "application/zip"

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'

    def chunks(self) -> Iterator[bytes]:
        return iter_zip(self.entries, self.compresslevel)

    def write_to(self, sink: BinaryIO) -> int:
        n = 0
        for chunk in self.chunks():
            sink.write(chunk)
            n += len(chunk)
        return n


class ArchiveExporter:
    def __init__(
        self,
        catalog: PhotoCatalog,
        blobs: BlobStore,
        slot_names: Optional[Dict[str, str]] = None,
        project_names: Optional[Dict[str, str]] = None,
        default_project_name: str = "HomeProject",
        compresslevel: int = 5,
    ):
        self.catalog = catalog
        self.blobs = blobs
        self.slot_names = slot_names or {}
        self.project_names = project_names or {}
        self.default_project_name = default_project_name
        self.compresslevel = compresslevel

    def friendly_name(self, slot_id: str) -> str:
        return self.slot_names.get(slot_id) or slot_id

    def archive_filename(self, slot_id: str) -> str:
        project = self.project_names.get(slot_id) or self.default_project_name
        return f"{project}-photos.zip"

    def export_slot(self, slot_id: str) -> SlotArchive:
        """
        カタログを先に確定させてから SlotArchive を返す（写真0件なら NotFoundError）。
        番号は古い順の 1 始まり。ファイルが無いエントリは飛ばし、番号は詰めない。
        """
        photos = self.catalog.list_by_slot(slot_id)
        if not photos:
            raise NotFoundError("No photos found")

        base = self.friendly_name(slot_id)
        entries: List[ArchiveEntry] = []
        for index, photo in enumerate(photos, start=1):
            if not self.blobs.exists(photo.filename):
                logger.warning("Photo %s missing on disk, skipped in export", photo.id)
                continue
            entries.append(
                ArchiveEntry(
                    arcname=f"{base}-photo-{index}.{STORED_EXTENSION}",
                    path=self.blobs.path_for(photo.filename),
                )
            )

        archive = SlotArchive(
            filename=self.archive_filename(slot_id),
            entries=entries,
            compresslevel=self.compresslevel,
        )
        logger.info("Exporting %d photo(s) for slot %r as %s", len(entries), slot_id, archive.filename)
        return archive
