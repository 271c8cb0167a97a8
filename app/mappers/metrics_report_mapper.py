"""
app/mappers/metrics_report_mapper.py

Maps stored metrics entries onto the monthly reporting shape.

Response-side figures (telephone counts, response SLA) have no source
column and are always reported as missing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.domain.ticket_metrics import TicketMetricEntry

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

ENGLISH_MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class TicketMetricsReport:
    """
    One reporting row derived from a TicketMetricEntry.
    """

    application: str | None
    month: str | None
    no_of_tickets_received: int
    mttr_resolve_min: int
    adherence_to_resolution_sla: str
    resolution_adherence_rate: str
    no_of_tickets_responded_by_tel: int | None = None
    mttr_respond_min: int | None = None
    adherence_to_response_sla: str | None = None
    slipped_response_sla: int | None = None
    response_adherence_rate: str | None = None
    no_of_tickets_resolved_by_tel: int | None = None
    slipped_resolution_sla: int | None = None
    remarks: str | None = None
    resolution_remarks: str | None = None


def _round_to_int(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def full_month_name(month: str | None) -> str | None:
    """
    ``"2024-07"`` -> ``"July"``; anything that is not a valid YYYY-MM gives None.
    """

    if month is None or not MONTH_PATTERN.fullmatch(month):
        return None
    return ENGLISH_MONTH_NAMES[int(month[5:7]) - 1]


def format_percent(value: float) -> str:
    return f"{_round_to_int(value)}%"


def to_metrics_report(entry: TicketMetricEntry | None) -> TicketMetricsReport | None:
    if entry is None:
        return None

    resolution_rate = format_percent(entry.sla_adherence_percent)
    return TicketMetricsReport(
        application=entry.application,
        month=full_month_name(entry.month),
        no_of_tickets_received=entry.total_tickets,
        mttr_resolve_min=_round_to_int(entry.mttr_hours * 60.0),
        adherence_to_resolution_sla=resolution_rate,
        resolution_adherence_rate=resolution_rate,
    )
