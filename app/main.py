from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_log_level, get_ticket_ingestion_settings
from app.repositories.dataset_store import get_dataset_store
from app.schemas.ticket_metrics import HealthResponse


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_log_level()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Log the effective ingestion limits on boot."""
    settings = get_ticket_ingestion_settings()
    logging.getLogger(__name__).info(
        "Ticket metrics API started max_upload_bytes=%s sla_target_percent=%s",
        settings.max_upload_bytes,
        settings.sla_target_percent,
    )
    yield
    logging.getLogger(__name__).info("Ticket metrics API shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Ticket Metrics API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        ticket_metrics_router,
        ticket_rows_router,
        ticket_upload_router,
    )

    application.include_router(ticket_upload_router)
    application.include_router(ticket_metrics_router)
    application.include_router(ticket_rows_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(
            status="ok",
            dataset_version=get_dataset_store().current().version,
        )

    return application


app = create_app()
