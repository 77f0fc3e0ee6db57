# backend/homeprojects/deps.py
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from homeprojects.config import Settings
from homeprojects.db import Database
from homeprojects.services.blobs.store import BlobStore
from homeprojects.services.catalog.photos import PhotoCatalog
from homeprojects.services.export.archive import ArchiveExporter
from homeprojects.services.images.normalize import ImageLimits
from homeprojects.services.photos.lifecycle import PhotoService
from homeprojects.services.progress import ProgressAggregator
from homeprojects.services.records.store import RecordStore

# create_app() が app.state に置いたものをリクエストごとに組み立てる


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    yield from database.session()


def get_blobs(request: Request) -> BlobStore:
    return request.app.state.blobs


def get_records(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_catalog(db: Session = Depends(get_db)) -> PhotoCatalog:
    return PhotoCatalog(db)


def get_photos(
    catalog: PhotoCatalog = Depends(get_catalog),
    blobs: BlobStore = Depends(get_blobs),
    settings: Settings = Depends(get_app_settings),
) -> PhotoService:
    return PhotoService(catalog, blobs, ImageLimits.from_settings(settings))


def get_exporter(
    catalog: PhotoCatalog = Depends(get_catalog),
    blobs: BlobStore = Depends(get_blobs),
    settings: Settings = Depends(get_app_settings),
) -> ArchiveExporter:
    return ArchiveExporter(
        catalog,
        blobs,
        slot_names=settings.slot_names,
        project_names=settings.project_names,
        default_project_name=settings.default_project_name,
        compresslevel=settings.zip_compression_level,
    )


def get_progress(
    records: RecordStore = Depends(get_records),
    catalog: PhotoCatalog = Depends(get_catalog),
) -> ProgressAggregator:
    return ProgressAggregator(records, catalog)
