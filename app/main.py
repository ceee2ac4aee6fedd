from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlparse

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.errors import register_error_handlers
from app.api.routes import resumes_router, router
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.resume_repository import ResumeRepository
from app.logging.logger import Log
from app.pipeline.processor import ResumeIngestionPipeline, build_pipeline


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    if settings.resume_registry_enabled:
        init_pool(settings)
    try:
        yield
    finally:
        if settings.resume_registry_enabled:
            close_pool()


def create_app(
    settings: Settings | None = None,
    pipeline: ResumeIngestionPipeline | None = None,
) -> FastAPI:
    """Build the HTTP app: settings -> collaborators -> routes."""
    settings = settings or Settings()
    resume_repo = ResumeRepository() if settings.resume_registry_enabled else None

    app = FastAPI(title="Resume Ingestion Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.resume_repo = resume_repo
    app.state.pipeline = pipeline or build_pipeline(settings, resume_repo=resume_repo)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)
    if resume_repo is not None:
        app.include_router(resumes_router)

    if settings.storage_backend.strip().lower() == "local":
        _mount_local_files(app, settings)
    return app


def _mount_local_files(app: FastAPI, settings: Settings) -> None:
    """Serve locally stored resumes at their public URLs."""
    mount_path = urlparse(settings.storage_public_base_url).path.rstrip("/")
    if not mount_path:
        Log.warning("storage_public_base_url has no path; local resumes are not served")
        return
    root = Path(settings.storage_local_root)
    root.mkdir(parents=True, exist_ok=True)
    app.mount(mount_path, StaticFiles(directory=root), name="files")


def main() -> None:
    """Entry point: load settings -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
