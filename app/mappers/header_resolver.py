"""
app/mappers/header_resolver.py

Alias-based mapping of workbook header rows to logical ticket fields.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Sequence

from app.domain.ticket_metrics import HeaderMap, LogicalField
from app.validators.cell_coercion import RawCell, as_text

logger = logging.getLogger(__name__)

DEFAULT_FIELD_ALIASES: Mapping[LogicalField, tuple[str, ...]] = MappingProxyType(
    {
        LogicalField.IDENTIFIER: ("id", "ticket_id", "issue_id", "sr_no", "sr", "no", "number"),
        LogicalField.CREATED_AT: (
            "created_at",
            "created",
            "opened_at",
            "open_date",
            "created date",
            "date created",
        ),
        LogicalField.RESOLVED_AT: (
            "resolved_at",
            "resolved",
            "closed_at",
            "close_date",
            "resolved date",
            "date resolved",
        ),
        LogicalField.PRIORITY: ("priority", "prio", "severity", "impact"),
        LogicalField.SLA_TARGET_HOURS: (
            "sla_hours",
            "sla",
            "target_hours",
            "target",
            "resolution_target_hours",
        ),
        LogicalField.APPLICATION: ("application", "app", "service", "project"),
    }
)


def normalize_header(header: str) -> str:
    """
    Normalize a column name for case-insensitive exact matching.
    """

    return header.strip().lower()


class HeaderResolver:
    """
    Resolves header cells into a HeaderMap using ordered alias lists.

    Unmatched fields stay unresolved; a missing header row is not an error.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[LogicalField, Sequence[str]] | None = None,
    ) -> None:
        self._aliases: dict[LogicalField, tuple[str, ...]] = {
            logical_field: tuple(normalize_header(alias) for alias in values)
            for logical_field, values in (aliases or DEFAULT_FIELD_ALIASES).items()
        }

    def resolve(self, header_cells: Sequence[RawCell] | None) -> HeaderMap:
        """
        Build a HeaderMap from one header row, or an all-unresolved map for ``None``.
        """

        if header_cells is None:
            return HeaderMap.unresolved()
        return self.resolve_names([as_text(cell) for cell in header_cells])

    def resolve_names(self, header_names: Sequence[str | None]) -> HeaderMap:
        """
        Build a HeaderMap from header texts; ``None`` entries are skipped.
        """

        column_by_name: dict[str, int] = {}
        for index, name in enumerate(header_names):
            if name is None:
                continue
            normalized = normalize_header(name)
            if normalized and normalized not in column_by_name:
                column_by_name[normalized] = index

        resolved: dict[LogicalField, int | None] = {}
        for logical_field, aliases in self._aliases.items():
            resolved[logical_field] = self._find_by_aliases(column_by_name, aliases)

        unresolved = [field.value for field, index in resolved.items() if index is None]
        if unresolved:
            logger.debug("Unresolved ticket columns: %s", ", ".join(unresolved))
        return HeaderMap(resolved)

    @staticmethod
    def _find_by_aliases(column_by_name: Mapping[str, int], aliases: Sequence[str]) -> int | None:
        for alias in aliases:
            index = column_by_name.get(alias)
            if index is not None:
                return index
        return None
