# backend/homeprojects/services/blobs/store.py
from __future__ import annotations

import logging
from pathlib import Path

from homeprojects.errors import StoreError, ValidationError

logger = logging.getLogger("homeprojects.blobs")


class BlobStore:
    """Flat directory of stored photo files, addressed by filename."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        # uploads/ 直下のみ許可（パス区切り・.. を拒否）
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValidationError(f"Invalid blob name: {name!r}")
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def write(self, data: bytes, name: str) -> Path:
        path = self.path_for(name)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.exception("Failed to write blob %s", path)
            raise StoreError("Failed to save file") from e
        return path

    def create(self, data: bytes, name: str) -> Path:
        """Write a new blob; FileExistsError if the name is already taken."""
        path = self.path_for(name)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            # "xb" で排他的に作成（同名ファイルは上書きしない）
            with open(path, "xb") as f:
                f.write(data)
        except FileExistsError:
            raise
        except OSError as e:
            logger.exception("Failed to create blob %s", path)
            raise StoreError("Failed to save file") from e
        return path

    def delete(self, name: str) -> bool:
        """Remove a blob. A missing file counts as already deleted."""
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.exception("Failed to delete blob %s", path)
            raise StoreError("Failed to delete file") from e
        return True
