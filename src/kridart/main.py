# src/kridart/main.py
"""Main entry point for the KridArt Stage backend."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from kridart.api.endpoints import (
    assets_router,
    auth_router,
    chat_router,
    projects_router,
    system_router,
)
from kridart.core.errors import register_exception_handlers
from kridart.core.logging import configure_logging
from kridart.core.settings import Settings, settings
from kridart.db.session import SessionLocal, create_tables
from kridart.repositories.message_repo import SqlMessageStore
from kridart.services.chat import ChatHub
from kridart.services.rate_limit import FixedWindowRateLimiter
from kridart.services.storage import LocalBlobStorage
from kridart.services.tokens import TokenService

logger = logging.getLogger(__name__)


def create_app(config: Settings = settings) -> FastAPI:
    """Build the application and its process-scoped services.

    The token service, rate limiter, chat hub and blob storage are created
    once here and shared through ``app.state``.
    """
    app = FastAPI(
        title=f"{config.app_name} API",
        description="Accounts, project documents and live chat for KridArt",
        version=config.app_version,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)
    # Read by the error handlers to decide whether to expose diagnostics.
    app.state.debug = config.debug

    app.state.token_service = TokenService(
        config.secret_key,
        algorithm=config.jwt_algorithm,
        lifetime=timedelta(minutes=config.access_token_expire_minutes),
    )
    app.state.rate_limiter = FixedWindowRateLimiter(
        config.rate_limit_max_requests,
        config.rate_limit_window_seconds,
    )
    app.state.chat_hub = ChatHub(
        SqlMessageStore(SessionLocal, history_limit=config.chat_history_limit)
    )
    app.state.blob_storage = LocalBlobStorage(config.upload_dir)

    # Include API routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(projects_router, prefix="/api")
    app.include_router(assets_router, prefix="/api")
    app.include_router(system_router, prefix="/api")
    app.include_router(chat_router)

    app.mount(
        "/uploads",
        StaticFiles(directory=config.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        configure_logging(config.log_level, json_output=config.log_json)
        if config.uses_default_secret:
            logger.warning(
                "SECRET_KEY is the development placeholder; set it before deploying"
            )
        if config.auto_create_tables:
            create_tables()
        Path(config.upload_dir).mkdir(parents=True, exist_ok=True)
        logger.info("%s %s started", config.app_name, config.app_version)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": config.app_name,
            "version": config.app_version,
            "docs": "/docs",
            "chat": "/ws/chat",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run("kridart.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
