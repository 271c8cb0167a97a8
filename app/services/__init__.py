"""
app/services package marker.
"""

from app.services.metrics_aggregator import MetricsAccumulator, build_remarks, round_half_up
from app.services.ticket_ingestion_service import TicketIngestionService, get_ticket_ingestion_service
from app.services.ticket_query_service import TicketQueryService, get_ticket_query_service

__all__ = [
    "MetricsAccumulator",
    "TicketIngestionService",
    "TicketQueryService",
    "build_remarks",
    "get_ticket_ingestion_service",
    "get_ticket_query_service",
    "round_half_up",
]
