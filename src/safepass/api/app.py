"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from safepass.api.routes import health, passwords
from safepass.core.config import AppSettings
from safepass.core.logging import configure_logging
from safepass.core.protocols import ICredentialStore
from safepass.exporter.export_service import ExportService
from safepass.importer.pipeline import ImportPipeline
from safepass.persistence import create_persistence

logger = structlog.get_logger(__name__)


def create_app(
    settings: AppSettings | None = None,
    store: ICredentialStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend chosen by settings (tests pass a memory store).
    """
    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        configure_logging(settings.log_level, json=settings.log_json)
        credential_store = store if store is not None else create_persistence(settings)
        app.state.settings = settings
        app.state.store = credential_store
        app.state.import_pipeline = ImportPipeline(
            credential_store, auto_encrypt=settings.importer.auto_encrypt,
        )
        app.state.export_service = ExportService(credential_store)
        logger.info(
            "app_started",
            environment=settings.environment,
            backend=type(credential_store).__name__,
        )
        yield
        logger.info("app_stopped")

    app = FastAPI(
        title="SafePass Credential Vault",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(passwords.router, prefix="/passwords")
    return app
