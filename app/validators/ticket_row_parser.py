"""
app/validators/ticket_row_parser.py

Row-level parsing and metric derivation for ticket workbook ingestion.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from openpyxl.utils.datetime import WINDOWS_EPOCH

from app.domain.ticket_metrics import HeaderMap, LogicalField, TicketRow
from app.validators.cell_coercion import CellKind, RawCell, as_number, as_text, as_timestamp

SLA_EPSILON_HOURS = 1e-9

_ONE_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class ParsedRow:
    """
    Normalized row plus the soft-defect notes raised while parsing it.
    """

    row: TicketRow
    notes: tuple[str, ...] = ()


def elapsed_minutes(created_at: datetime, resolved_at: datetime) -> int:
    """
    Whole minutes between two timestamps, truncated toward zero.
    """

    return int((resolved_at - created_at) / _ONE_MINUTE)


def month_of(created_at: datetime | None) -> str | None:
    if created_at is None:
        return None
    return f"{created_at.year:04d}-{created_at.month:02d}"


def is_sla_met(
    *,
    created_at: datetime | None,
    resolved_at: datetime | None,
    sla_target_hours: float | None,
) -> bool:
    """
    True when the resolution fits within the SLA target (boundary inclusive).
    """

    if created_at is None or resolved_at is None or sla_target_hours is None:
        return False
    actual_hours = elapsed_minutes(created_at, resolved_at) / 60.0
    return actual_hours <= sla_target_hours + SLA_EPSILON_HOURS


class TicketRowParser:
    """
    Parses one data row into a TicketRow, never raising on malformed cells.
    """

    def is_completely_empty_row(self, cells: Sequence[RawCell]) -> bool:
        """
        Return True when no cell in the row holds any value.

        Whitespace-only text and error cells are present values, so such a
        row is still a ticket.
        """

        return all(cell is None or cell.resolved().kind is CellKind.BLANK for cell in cells)

    def parse_row(
        self,
        cells: Sequence[RawCell],
        header_map: HeaderMap,
        *,
        row_number: int,
        epoch: datetime = WINDOWS_EPOCH,
    ) -> ParsedRow:
        """
        Parse one data row; ``row_number`` is the 1-based sheet row used in notes.
        """

        notes: list[str] = []

        identifier = as_text(self._cell(cells, header_map, LogicalField.IDENTIFIER))
        if header_map.is_resolved(LogicalField.IDENTIFIER) and identifier is None:
            notes.append(f"Row {row_number}: missing id")

        created_at = as_timestamp(self._cell(cells, header_map, LogicalField.CREATED_AT), epoch=epoch)
        resolved_at = as_timestamp(self._cell(cells, header_map, LogicalField.RESOLVED_AT), epoch=epoch)
        sla_target_hours = as_number(self._cell(cells, header_map, LogicalField.SLA_TARGET_HOURS))
        application = as_text(self._cell(cells, header_map, LogicalField.APPLICATION))
        priority = as_text(self._cell(cells, header_map, LogicalField.PRIORITY))

        resolve_minutes = 0
        if created_at is not None and resolved_at is not None:
            resolve_minutes = max(elapsed_minutes(created_at, resolved_at), 0)

        sla_met = is_sla_met(
            created_at=created_at,
            resolved_at=resolved_at,
            sla_target_hours=sla_target_hours,
        )

        row = TicketRow(
            identifier=identifier,
            created_at=created_at,
            resolved_at=resolved_at,
            application=application,
            priority=priority,
            sla_target_hours=sla_target_hours,
            resolve_minutes=resolve_minutes,
            resolution_sla_percent=100 if sla_met else 0,
            month=month_of(created_at),
        )
        return ParsedRow(row=row, notes=tuple(notes))

    @staticmethod
    def _cell(
        cells: Sequence[RawCell],
        header_map: HeaderMap,
        logical_field: LogicalField,
    ) -> RawCell | None:
        index = header_map.column_for(logical_field)
        if index is None or index >= len(cells):
            return None
        return cells[index]
