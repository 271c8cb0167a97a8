"""
app/domain/ticket_metrics.py

Domain models used by the ticket workbook ingestion and query flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

NO_TICKETS_REMARK = "No tickets found."


class LogicalField(str, Enum):
    """
    Semantic ticket columns recognised in uploaded workbooks.
    """

    IDENTIFIER = "identifier"
    CREATED_AT = "created_at"
    RESOLVED_AT = "resolved_at"
    PRIORITY = "priority"
    SLA_TARGET_HOURS = "sla_target_hours"
    APPLICATION = "application"


class HeaderMap:
    """
    Immutable mapping from logical field to zero-based column index.

    Fields that could not be matched map to ``None``.
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Mapping[LogicalField, int | None] | None = None) -> None:
        resolved = {logical_field: None for logical_field in LogicalField}
        for logical_field, index in (columns or {}).items():
            resolved[LogicalField(logical_field)] = index
        self._columns: Mapping[LogicalField, int | None] = MappingProxyType(resolved)

    @classmethod
    def unresolved(cls) -> HeaderMap:
        return cls()

    def column_for(self, logical_field: LogicalField) -> int | None:
        return self._columns[logical_field]

    def is_resolved(self, logical_field: LogicalField) -> bool:
        return self._columns[logical_field] is not None

    def as_dict(self) -> dict[str, int | None]:
        return {logical_field.value: index for logical_field, index in self._columns.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return dict(self._columns) == dict(other._columns)

    def __hash__(self) -> int:
        return hash(tuple(self._columns.items()))

    def __repr__(self) -> str:
        return f"HeaderMap({self.as_dict()!r})"


@dataclass(frozen=True)
class TicketRow:
    """
    One normalized ticket record parsed from a data row.

    Text fields default to ``None``; derived integer metrics default to 0.
    """

    identifier: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    application: str | None = None
    priority: str | None = None
    sla_target_hours: float | None = None
    response_minutes: int = 0
    resolve_minutes: int = 0
    response_sla_percent: int = 0
    resolution_sla_percent: int = 0
    month: str | None = None

    @property
    def has_resolution_window(self) -> bool:
        """True when both creation and resolution timestamps were parsed."""
        return self.created_at is not None and self.resolved_at is not None


@dataclass(frozen=True)
class MetricsSummary:
    """
    Dataset-level aggregate produced by one ingestion.
    """

    total_tickets: int
    sla_adherence_percent: float
    mttr_hours: float
    remarks: str
    details: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> MetricsSummary:
        return cls(
            total_tickets=0,
            sla_adherence_percent=0.0,
            mttr_hours=0.0,
            remarks=NO_TICKETS_REMARK,
        )


@dataclass(frozen=True)
class TicketMetricEntry:
    """
    Filterable metrics record kept alongside the latest dataset.

    Ingestion does not know which application or month an upload covers,
    so both are ``None`` for entries it produces.
    """

    total_tickets: int
    sla_adherence_percent: float
    mttr_hours: float
    application: str | None = None
    month: str | None = None

    @classmethod
    def from_summary(cls, summary: MetricsSummary) -> TicketMetricEntry:
        return cls(
            total_tickets=summary.total_tickets,
            sla_adherence_percent=summary.sla_adherence_percent,
            mttr_hours=summary.mttr_hours,
        )


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    Atomically published result of one ingestion (rows + summary).

    ``version`` is assigned by the store on publish; 0 marks the
    never-ingested sentinel.
    """

    rows: tuple[TicketRow, ...]
    summary: MetricsSummary
    metrics_entry: TicketMetricEntry | None = None
    version: int = 0

    @property
    def is_empty_sentinel(self) -> bool:
        return self.version == 0


EMPTY_SNAPSHOT = DatasetSnapshot(rows=(), summary=MetricsSummary.empty())


@dataclass(frozen=True)
class PagedResult:
    """
    One page of filtered ticket rows with totals over the filtered set.
    """

    page: int
    size: int
    total_items: int
    total_pages: int
    items: tuple[TicketRow, ...] = field(default_factory=tuple)
