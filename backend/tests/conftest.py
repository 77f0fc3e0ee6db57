import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from homeprojects.config import Settings
from homeprojects.db import Database
from homeprojects.main import create_app
from homeprojects.services.blobs.store import BlobStore
from homeprojects.services.catalog.photos import PhotoCatalog
from homeprojects.services.images.normalize import ImageLimits
from homeprojects.services.photos.lifecycle import PhotoService
from homeprojects.services.records.store import RecordStore


def make_image_bytes(size=(64, 48), fmt="PNG", color=(200, 30, 30), exif=None) -> bytes:
    """Build a small in-memory image for upload tests."""
    img = Image.new("RGB", size, color)
    buf = io.BytesIO()
    if exif is not None:
        img.save(buf, format=fmt, exif=exif)
    else:
        img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path at a per-test temp directory."""
    return Settings(data_dir=tmp_path / "data", static_dir=tmp_path / "public")


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.init()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    gen = database.session()
    s = next(gen)
    yield s
    gen.close()


@pytest.fixture
def records(session) -> RecordStore:
    return RecordStore(session)


@pytest.fixture
def catalog(session) -> PhotoCatalog:
    return PhotoCatalog(session)


@pytest.fixture
def blobs(settings) -> BlobStore:
    return BlobStore(settings.uploads_dir)


@pytest.fixture
def photo_service(catalog, blobs, settings) -> PhotoService:
    return PhotoService(catalog, blobs, ImageLimits.from_settings(settings))


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
