from __future__ import annotations

import io
from typing import Any, Callable, Iterable, Sequence

import openpyxl
import pytest

from app.config import TicketIngestionSettings
from app.repositories.dataset_store import DatasetStore
from app.services.ticket_ingestion_service import TicketIngestionService


def build_workbook_bytes(rows: Iterable[Sequence[Any]], *, sheet_title: str = "Tickets") -> bytes:
    """Serialize rows into an in-memory .xlsx workbook (first sheet only)."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def workbook_bytes() -> Callable[..., bytes]:
    return build_workbook_bytes


@pytest.fixture()
def store() -> DatasetStore:
    return DatasetStore()


@pytest.fixture()
def ingestion_service(store: DatasetStore) -> TicketIngestionService:
    return TicketIngestionService(store=store, settings=TicketIngestionSettings())
