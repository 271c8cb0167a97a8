"""
app/mappers package marker.
"""

from app.mappers.header_resolver import DEFAULT_FIELD_ALIASES, HeaderResolver
from app.mappers.metrics_report_mapper import TicketMetricsReport, to_metrics_report

__all__ = [
    "DEFAULT_FIELD_ALIASES",
    "HeaderResolver",
    "TicketMetricsReport",
    "to_metrics_report",
]
