# unpacked/main.py

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from unpacked.api.v1.api import api_router
from unpacked.core.config import settings
from unpacked.core.errors import register_exception_handlers
from unpacked.core.logging import configure_logging
from unpacked.db.init_db import init_db
from unpacked.services.storage import UPLOADS_URL_PREFIX


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_application() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    # Every failure goes out as {"error": "..."}
    register_exception_handlers(app)

    # ---------- STATIC FILES ----------
    # Local-disk uploads (UPLOAD_BACKEND=local) are served from /uploads/*
    if settings.upload_backend == "local":
        media_root = Path(settings.media_root)
        media_root.mkdir(parents=True, exist_ok=True)
        app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=media_root), name="uploads")

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/healthz", tags=["system"])
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_application()
