from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .articles import router as articles_router
from .auth import router as auth_router
from .log_config import configure_logging
from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    explicit = settings is not None
    settings = settings or get_settings()

    app = FastAPI(title="Article Tree API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if explicit:
        app.dependency_overrides[get_settings] = lambda: settings
    app.include_router(auth_router)
    app.include_router(articles_router)

    @app.get("/api/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("Article Tree API configured (environment=%s, db=%s)", settings.environment, settings.sqlite_db_path)
    return app


configure_logging(get_settings().log_level)
app = create_app()


__all__ = ["app", "create_app"]
