"""
app/schemas package marker.
"""

from app.schemas.ticket_metrics import (
    HealthResponse,
    PagedTicketRowsResponse,
    TicketMetricEntryResponse,
    TicketMetricsReportResponse,
    TicketMetricsResponse,
    TicketRowResponse,
)

__all__ = [
    "HealthResponse",
    "PagedTicketRowsResponse",
    "TicketMetricEntryResponse",
    "TicketMetricsReportResponse",
    "TicketMetricsResponse",
    "TicketRowResponse",
]
