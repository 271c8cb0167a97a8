"""
app/services/metrics_aggregator.py

Streaming fold of parsed ticket rows into a dataset-level MetricsSummary.

Formulas
--------
Total tickets      = rows folded (rows with soft defects included)
MTTR (hours)       = mean(resolve_minutes / 60) over rows with both
                     creation and resolution timestamps; 0 when none
SLA adherence (%)  = 100 * rows meeting SLA / total tickets; 0 when empty

Both aggregates are rounded half-up to two decimals.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from app.domain.ticket_metrics import NO_TICKETS_REMARK, MetricsSummary, TicketRow

logger = logging.getLogger(__name__)

DEFAULT_SLA_TARGET_PERCENT = 80.0

_HUNDREDTHS = Decimal("0.01")


def round_half_up(value: float, places: Decimal = _HUNDREDTHS) -> float:
    """
    Round using half-up at the given quantum (hundredths by default).
    """

    return float(Decimal(repr(value)).quantize(places, rounding=ROUND_HALF_UP))


def build_remarks(
    *,
    total_tickets: int,
    resolved_count: int,
    sla_adherence_percent: float,
    sla_target_percent: float = DEFAULT_SLA_TARGET_PERCENT,
) -> str:
    """
    Assemble the human-readable remarks line in its fixed part order.
    """

    if total_tickets == 0:
        return NO_TICKETS_REMARK

    parts: list[str] = []
    unresolved = total_tickets - resolved_count
    if unresolved > 0:
        parts.append(f"{unresolved} ticket(s) without resolution date.")
    if sla_adherence_percent < sla_target_percent:
        parts.append("SLA adherence below target.")
    else:
        parts.append("SLA adherence acceptable.")
    return " ".join(parts)


class MetricsAccumulator:
    """
    Incremental aggregator; feed rows with :meth:`add` then call :meth:`summarize`.

    Parameters
    ----------
    sla_target_percent:
        Adherence threshold below which remarks flag the SLA as missed.
    max_notes:
        Upper bound on retained defect notes; ``None`` keeps every note.
    """

    def __init__(
        self,
        *,
        sla_target_percent: float = DEFAULT_SLA_TARGET_PERCENT,
        max_notes: int | None = None,
    ) -> None:
        self._sla_target_percent = sla_target_percent
        self._max_notes = max_notes
        self._total = 0
        self._sla_met = 0
        self._resolved_count = 0
        self._resolution_hours_sum = 0.0
        self._notes: list[str] = []
        self._dropped_notes = 0

    @property
    def total_tickets(self) -> int:
        return self._total

    def add(self, row: TicketRow) -> None:
        self._total += 1
        if row.has_resolution_window:
            self._resolved_count += 1
            self._resolution_hours_sum += row.resolve_minutes / 60.0
        if row.resolution_sla_percent == 100:
            self._sla_met += 1

    def add_all(self, rows: Iterable[TicketRow]) -> None:
        for row in rows:
            self.add(row)

    def add_note(self, note: str) -> None:
        if self._max_notes is not None and len(self._notes) >= self._max_notes:
            self._dropped_notes += 1
            return
        self._notes.append(note)

    def summarize(self) -> MetricsSummary:
        """
        Produce the rounded summary for everything folded so far.
        """

        if self._total == 0:
            return MetricsSummary(
                total_tickets=0,
                sla_adherence_percent=0.0,
                mttr_hours=0.0,
                remarks=NO_TICKETS_REMARK,
                details=tuple(self._notes),
            )

        mttr = self._resolution_hours_sum / self._resolved_count if self._resolved_count else 0.0
        sla_percent = self._sla_met * 100.0 / self._total

        if self._dropped_notes:
            logger.info(
                "Defect notes truncated retained=%s dropped=%s",
                len(self._notes),
                self._dropped_notes,
            )

        return MetricsSummary(
            total_tickets=self._total,
            sla_adherence_percent=round_half_up(sla_percent),
            mttr_hours=round_half_up(mttr),
            remarks=build_remarks(
                total_tickets=self._total,
                resolved_count=self._resolved_count,
                sla_adherence_percent=sla_percent,
                sla_target_percent=self._sla_target_percent,
            ),
            details=tuple(self._notes),
        )


def summarize_rows(
    rows: Iterable[TicketRow],
    *,
    notes: Iterable[str] = (),
    sla_target_percent: float = DEFAULT_SLA_TARGET_PERCENT,
) -> MetricsSummary:
    """
    Convenience one-shot fold over an in-memory row sequence.
    """

    accumulator = MetricsAccumulator(sla_target_percent=sla_target_percent)
    accumulator.add_all(rows)
    for note in notes:
        accumulator.add_note(note)
    return accumulator.summarize()
