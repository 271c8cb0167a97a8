"""
app/services/ticket_query_service.py

Read-only filtering and pagination over the latest ingested dataset.
"""

from __future__ import annotations

import math
from typing import Iterable

from app.domain.ticket_metrics import PagedResult, TicketMetricEntry, TicketRow
from app.repositories.dataset_store import DatasetStore, get_dataset_store


def _is_unset(value: str | None) -> bool:
    return value is None or not value.strip()


def matches_filters(
    *,
    application: str | None,
    month: str | None,
    application_filter: str | None,
    month_filter: str | None,
) -> bool:
    """
    Case-insensitive exact application match and exact month match.

    Blank filters match everything; a set filter never matches a missing value.
    """

    if not _is_unset(application_filter):
        if application is None or application.casefold() != application_filter.casefold():
            return False
    if not _is_unset(month_filter):
        if month is None or month != month_filter:
            return False
    return True


class TicketQueryService:
    """
    Serves parsed rows and the stored metrics entry from a DatasetStore.
    """

    def __init__(self, store: DatasetStore) -> None:
        self._store = store

    def query_rows(
        self,
        page: int,
        size: int,
        application: str | None = None,
        month: str | None = None,
    ) -> PagedResult:
        """
        Return one zero-based page of rows matching the optional filters.

        ``page`` and ``size`` are assumed to be validated by the caller.
        """

        snapshot = self._store.current()
        filtered = list(self._filter_rows(snapshot.rows, application=application, month=month))

        total_items = len(filtered)
        if total_items == 0:
            return PagedResult(page=page, size=size, total_items=0, total_pages=0, items=())

        total_pages = math.ceil(total_items / size)
        start = min(page * size, total_items)
        end = min(start + size, total_items)
        return PagedResult(
            page=page,
            size=size,
            total_items=total_items,
            total_pages=total_pages,
            items=tuple(filtered[start:end]),
        )

    def query_metrics(
        self,
        application: str | None = None,
        month: str | None = None,
    ) -> list[TicketMetricEntry]:
        """
        Return stored metrics entries matching the optional filters.

        Entries produced by ingestion carry no application or month, so
        any non-blank filter excludes them.
        """

        entry = self._store.current().metrics_entry
        if entry is None:
            return []
        if not matches_filters(
            application=entry.application,
            month=entry.month,
            application_filter=application,
            month_filter=month,
        ):
            return []
        return [entry]

    @staticmethod
    def _filter_rows(
        rows: Iterable[TicketRow],
        *,
        application: str | None,
        month: str | None,
    ) -> Iterable[TicketRow]:
        for row in rows:
            if matches_filters(
                application=row.application,
                month=row.month,
                application_filter=application,
                month_filter=month,
            ):
                yield row


def get_ticket_query_service() -> TicketQueryService:
    """
    Build a query service bound to the shared dataset store.
    """

    return TicketQueryService(get_dataset_store())
