import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from homeprojects.api.routers import photos, progress, records
from homeprojects.config import Settings, get_settings
from homeprojects.db import Database
from homeprojects.errors import HomeProjectsError
from homeprojects.services.blobs.store import BlobStore

logger = logging.getLogger("homeprojects.main")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HomeProjectsError)
    async def handle_app_error(request: Request, exc: HomeProjectsError):
        if exc.status_code >= 500:
            # 詳細はサービス側でログ済み。クライアントには汎用メッセージのみ
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.__class__.__name__)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # 起動時に DB・ディレクトリを用意。失敗したら起動しない
    database = Database(settings)
    database.init()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        database.dispose()

    app = FastAPI(title=settings.api_title, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.blobs = BlobStore(settings.uploads_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(progress.router, prefix="/api/progress", tags=["progress"])
    app.include_router(records.router,  prefix="/api",          tags=["records"])
    app.include_router(photos.router,   prefix="/api/photos",   tags=["photos"])

    # 正規化済み画像を静的配信
    app.mount("/uploads", StaticFiles(directory=str(settings.uploads_dir)), name="uploads")

    static_dir = settings.static_dir.resolve()

    # public/ 配下のファイル、それ以外の GET はクライアント（index.html）を返す
    @app.get("/{full_path:path}", include_in_schema=False)
    def client_shell(full_path: str):
        if full_path:
            candidate = (static_dir / full_path).resolve()
            if candidate.is_file() and static_dir in candidate.parents:
                return FileResponse(candidate)
        index = static_dir / "index.html"
        if not index.is_file():
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return FileResponse(index)

    logger.info("Database location: %s", settings.database_path)
    logger.info("Uploads directory: %s", settings.uploads_dir)
    return app


def serve() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Home Projects server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
