"""
Unit tests for PhotoService: upload and delete across catalog + blob store.
"""

import pytest

from homeprojects.errors import (
    MissingFileError,
    NormalizationError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaError,
)
from homeprojects.services.photos.lifecycle import PhotoService, stored_filename

from conftest import make_image_bytes


def _files(blobs):
    return sorted(p.name for p in blobs.root.iterdir()) if blobs.root.exists() else []


class TestStoredFilename:

    def test_slot_and_millis(self):
        assert stored_filename("p1-dishwasher-latch", 1700000000123) == "p1-dishwasher-latch-1700000000123.jpg"

    def test_unsafe_characters_replaced(self):
        assert stored_filename("a/b c", 5) == "a_b_c-5.jpg"

    def test_suffix(self):
        assert stored_filename("s", 5, "abc123") == "s-5-abc123.jpg"


class TestUpload:

    def test_upload_stores_blob_and_row(self, photo_service, catalog, blobs):
        photo = photo_service.upload("p1-dishwasher-latch", make_image_bytes(), "image/png", "latch.png")
        assert photo.slot_id == "p1-dishwasher-latch"
        assert photo.filename.startswith("p1-dishwasher-latch-")
        assert photo.filename.endswith(".jpg")
        assert photo.original_name == "latch.png"
        assert blobs.exists(photo.filename)
        assert catalog.get(photo.id) is not None

    def test_same_millisecond_uploads_do_not_collide(self, catalog, blobs, photo_service):
        svc = PhotoService(catalog, blobs, photo_service.limits, clock=lambda: 1234)
        a = svc.upload("s", make_image_bytes(), "image/png", "a.png")
        b = svc.upload("s", make_image_bytes(), "image/png", "b.png")
        assert a.filename == "s-1234.jpg"
        assert b.filename != a.filename
        assert blobs.exists(a.filename) and blobs.exists(b.filename)

    def test_concurrent_same_millisecond_upload_keeps_both(self, catalog, blobs, photo_service):
        # 別リクエストが同名ファイルを先に作成した状態
        blobs.create(b"other request", "s-1234.jpg")
        svc = PhotoService(catalog, blobs, photo_service.limits, clock=lambda: 1234)
        photo = svc.upload("s", make_image_bytes(), "image/png", "b.png")
        assert photo.filename.startswith("s-1234-")
        assert blobs.path_for("s-1234.jpg").read_bytes() == b"other request"
        assert blobs.exists(photo.filename)

    def test_missing_data(self, photo_service):
        with pytest.raises(MissingFileError):
            photo_service.upload("s", b"", "image/png", "x.png")
        with pytest.raises(MissingFileError):
            photo_service.upload("s", None, "image/png", "x.png")

    def test_unsupported_type_writes_nothing(self, photo_service, blobs, catalog):
        with pytest.raises(UnsupportedMediaError):
            photo_service.upload("s", b"hello", "text/plain", "notes.txt")
        assert _files(blobs) == []
        assert catalog.list_by_slot("s") == []

    def test_oversized_rejected_before_decode(self, photo_service, blobs, monkeypatch):
        import homeprojects.services.photos.lifecycle as lifecycle

        def _boom(*args, **kwargs):
            raise AssertionError("normalize must not be called")

        monkeypatch.setattr(lifecycle, "normalize", _boom)
        with pytest.raises(PayloadTooLargeError):
            photo_service.upload("s", b"\0" * (15 * 1024 * 1024), "image/jpeg", "big.jpg")
        assert _files(blobs) == []

    def test_corrupt_image_leaves_no_file(self, photo_service, blobs, catalog):
        with pytest.raises(NormalizationError):
            photo_service.upload("s", b"not really a jpeg", "image/jpeg", "bad.jpg")
        assert _files(blobs) == []
        assert catalog.list_by_slot("s") == []


class TestDelete:

    def test_delete_removes_row_and_blob(self, photo_service, catalog, blobs):
        photo = photo_service.upload("s", make_image_bytes(), "image/png", "a.png")
        photo_id, filename = photo.id, photo.filename
        photo_service.delete(photo_id)
        assert catalog.get(photo_id) is None
        assert not blobs.exists(filename)

    def test_repeat_delete_is_not_found(self, photo_service):
        photo = photo_service.upload("s", make_image_bytes(), "image/png", "a.png")
        photo_id = photo.id
        photo_service.delete(photo_id)
        with pytest.raises(NotFoundError):
            photo_service.delete(photo_id)

    def test_delete_unknown(self, photo_service):
        with pytest.raises(NotFoundError):
            photo_service.delete(4242)

    def test_delete_row_whose_blob_is_gone(self, photo_service, catalog, blobs):
        photo = photo_service.upload("s", make_image_bytes(), "image/png", "a.png")
        photo_id = photo.id
        blobs.delete(photo.filename)
        photo_service.delete(photo_id)
        assert catalog.get(photo_id) is None
