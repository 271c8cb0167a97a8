"""
app/api/routers/ticket_metrics.py

Read endpoints for stored ticket metrics.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_application_filter, get_month_filter
from app.mappers.metrics_report_mapper import to_metrics_report
from app.schemas.ticket_metrics import TicketMetricEntryResponse, TicketMetricsReportResponse
from app.services.ticket_query_service import TicketQueryService, get_ticket_query_service

router = APIRouter(prefix="/api/tickets", tags=["ticket-metrics"])


@router.get("/metrics", response_model=list[TicketMetricEntryResponse])
def get_ticket_metrics(
    application: str | None = Depends(get_application_filter),
    month: str | None = Depends(get_month_filter),
    query_service: TicketQueryService = Depends(get_ticket_query_service),
) -> list[TicketMetricEntryResponse]:
    """
    Return stored metrics entries, optionally filtered by application and month.
    """

    entries = query_service.query_metrics(application=application, month=month)
    return [TicketMetricEntryResponse.model_validate(entry) for entry in entries]


@router.get("/metrics/report", response_model=list[TicketMetricsReportResponse])
def get_ticket_metrics_report(
    application: str | None = Depends(get_application_filter),
    month: str | None = Depends(get_month_filter),
    query_service: TicketQueryService = Depends(get_ticket_query_service),
) -> list[TicketMetricsReportResponse]:
    """
    Return stored metrics entries in the monthly reporting shape.
    """

    entries = query_service.query_metrics(application=application, month=month)
    return [
        TicketMetricsReportResponse.model_validate(to_metrics_report(entry))
        for entry in entries
    ]
