from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from persistence import CatalogStore, DiskBackupArchiver, DiskCatalogDocumentStore
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_catalog_store(settings: Settings) -> CatalogStore:
    return CatalogStore(
        DiskCatalogDocumentStore(settings.data_file),
        DiskBackupArchiver(settings.backup_dir),
        require_precondition=settings.require_if_match,
        log_requests=settings.debug_log_requests,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    from endpoints.catalog_endpoints import router as catalog_router

    app = FastAPI()
    app.state.settings = settings
    app.state.catalog_store = build_catalog_store(settings)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_allow_origins),
            allow_credentials=False,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "If-Match", "X-Admin-Token"],
            expose_headers=["ETag"],
        )

    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set; every save will be rejected")

    logger.info("Serving catalog from %s (backups in %s)", settings.data_file, settings.backup_dir)

    app.include_router(catalog_router)

    return app


app = create_app()
