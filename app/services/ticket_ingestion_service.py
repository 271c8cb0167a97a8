"""
app/services/ticket_ingestion_service.py

Service layer for ticket workbook ingestion.

An upload is checked on its declared metadata first (content, type, size,
extension), then opened with openpyxl. The first worksheet is parsed row by
row into TicketRow records which are folded into a MetricsSummary. The
complete DatasetSnapshot is built before it is published to the store, so
queries never observe a half-ingested dataset.

Soft defects (unmatched headers, blank ids, unparseable cells, unresolved
tickets) never abort ingestion; they degrade to defaults and, where the
row is at fault, are reported as notes in the summary.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator, Sequence
from datetime import datetime
from functools import lru_cache
from typing import Any, Iterable

import openpyxl
from openpyxl.utils.datetime import WINDOWS_EPOCH

from app.config import TicketIngestionSettings, get_ticket_ingestion_settings
from app.domain.errors import UnparseableWorkbookError, UploadValidationError
from app.domain.ticket_metrics import DatasetSnapshot, MetricsSummary, TicketMetricEntry, TicketRow
from app.mappers.header_resolver import HeaderResolver
from app.repositories.dataset_store import DatasetStore, get_dataset_store
from app.services.metrics_aggregator import MetricsAccumulator
from app.validators.cell_coercion import RawCell
from app.validators.ticket_row_parser import TicketRowParser

logger = logging.getLogger(__name__)


class TicketIngestionService:
    """
    Coordinates upload checks, workbook parsing, aggregation and publishing.
    """

    def __init__(
        self,
        *,
        store: DatasetStore,
        settings: TicketIngestionSettings | None = None,
        header_resolver: HeaderResolver | None = None,
        row_parser: TicketRowParser | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or TicketIngestionSettings()
        self._header_resolver = header_resolver or HeaderResolver()
        self._row_parser = row_parser or TicketRowParser()

    def ingest(
        self,
        file_bytes: bytes | None,
        content_type: str | None,
        filename: str | None,
        size_bytes: int | None = None,
    ) -> MetricsSummary:
        """
        Parse one uploaded workbook, replace the stored dataset, and return its summary.

        Raises:
            UploadValidationError: the upload fails a surface check.
            UnparseableWorkbookError: the bytes are not a readable workbook.
        """

        self.validate_upload(
            file_bytes=file_bytes,
            content_type=content_type,
            filename=filename,
            size_bytes=size_bytes,
        )

        workbook = self._open_workbook(file_bytes)
        try:
            sheet = self._first_sheet(workbook)
            epoch = getattr(workbook, "epoch", WINDOWS_EPOCH)
            snapshot = self.build_snapshot(_iter_sheet_rows(sheet), epoch=epoch)
        finally:
            workbook.close()

        self._store.replace(snapshot)
        summary = snapshot.summary
        logger.info(
            "Ticket workbook ingested filename=%r total=%s sla_percent=%s mttr_hours=%s notes=%s",
            filename,
            summary.total_tickets,
            summary.sla_adherence_percent,
            summary.mttr_hours,
            len(summary.details),
        )
        return summary

    def validate_upload(
        self,
        *,
        file_bytes: bytes | None,
        content_type: str | None,
        filename: str | None,
        size_bytes: int | None,
    ) -> None:
        """
        Reject uploads that are empty, of the wrong type, too large or misnamed.
        """

        if not file_bytes:
            raise UploadValidationError("File is required and must not be empty")

        normalized_type = (content_type or "").strip().lower()
        if normalized_type not in self._settings.accepted_content_types:
            raise UploadValidationError(
                "Unsupported content type. Expecting "
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            )

        declared_size = size_bytes if size_bytes is not None else len(file_bytes)
        if declared_size > self._settings.max_upload_bytes:
            max_mb = self._settings.max_upload_bytes / (1024 * 1024)
            raise UploadValidationError(f"File too large. Max {max_mb:g} MB")

        extension = self._settings.allowed_extension.lower()
        if not filename or not filename.strip().lower().endswith(extension):
            raise UploadValidationError(f"Only {extension} files are supported")

    def build_snapshot(
        self,
        sheet_rows: Iterable[Sequence[RawCell]],
        *,
        epoch: datetime = WINDOWS_EPOCH,
    ) -> DatasetSnapshot:
        """
        Fold sheet rows (header first) into an unpublished DatasetSnapshot.

        Row numbers in notes are 1-based sheet positions, header included.
        """

        accumulator = MetricsAccumulator(
            sla_target_percent=self._settings.sla_target_percent,
            max_notes=self._settings.max_defect_notes,
        )
        parsed_rows: list[TicketRow] = []

        numbered_rows = enumerate(sheet_rows, start=1)
        header_cells = self._find_header(numbered_rows)
        header_map = self._header_resolver.resolve(header_cells)

        for row_number, cells in numbered_rows:
            if self._row_parser.is_completely_empty_row(cells):
                continue

            parsed = self._row_parser.parse_row(
                cells,
                header_map,
                row_number=row_number,
                epoch=epoch,
            )
            for note in parsed.notes:
                self._record_note(accumulator, note)
            accumulator.add(parsed.row)
            parsed_rows.append(parsed.row)

        summary = accumulator.summarize()
        return DatasetSnapshot(
            rows=tuple(parsed_rows),
            summary=summary,
            metrics_entry=TicketMetricEntry.from_summary(summary),
        )

    def _find_header(self, numbered_rows: Iterator[tuple[int, Sequence[RawCell]]]) -> Sequence[RawCell] | None:
        for _, cells in numbered_rows:
            if not self._row_parser.is_completely_empty_row(cells):
                return cells
        return None

    def _record_note(self, accumulator: MetricsAccumulator, note: str) -> None:
        if self._settings.log_row_defects:
            logger.warning("Ticket row defect: %s", note)
        accumulator.add_note(note)

    @staticmethod
    def _open_workbook(file_bytes: bytes) -> Any:
        try:
            return openpyxl.load_workbook(io.BytesIO(file_bytes), data_only=True)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Unable to open uploaded workbook: %s", exc)
            raise UnparseableWorkbookError("Unable to parse Excel file") from exc

    @staticmethod
    def _first_sheet(workbook: Any) -> Any:
        worksheets = workbook.worksheets
        if not worksheets:
            raise UnparseableWorkbookError("Excel has no sheets")
        sheet = worksheets[0]
        if sheet is None:
            raise UnparseableWorkbookError("Unable to open first sheet")
        return sheet


def _iter_sheet_rows(sheet: Any) -> Iterator[list[RawCell]]:
    try:
        for row in sheet.iter_rows():
            yield [RawCell.from_openpyxl(cell) for cell in row]
    except Exception as exc:  # noqa: BLE001
        raise UnparseableWorkbookError("Unable to parse Excel file") from exc


@lru_cache(maxsize=1)
def get_ticket_ingestion_service() -> TicketIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """

    return TicketIngestionService(
        store=get_dataset_store(),
        settings=get_ticket_ingestion_settings(),
    )
