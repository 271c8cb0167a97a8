"""
app/domain package marker.
"""

from app.domain.errors import TicketMetricsError, UnparseableWorkbookError, UploadValidationError
from app.domain.ticket_metrics import (
    EMPTY_SNAPSHOT,
    DatasetSnapshot,
    HeaderMap,
    LogicalField,
    MetricsSummary,
    PagedResult,
    TicketMetricEntry,
    TicketRow,
)

__all__ = [
    "EMPTY_SNAPSHOT",
    "DatasetSnapshot",
    "HeaderMap",
    "LogicalField",
    "MetricsSummary",
    "PagedResult",
    "TicketMetricEntry",
    "TicketMetricsError",
    "TicketRow",
    "UnparseableWorkbookError",
    "UploadValidationError",
]
