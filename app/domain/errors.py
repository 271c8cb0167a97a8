"""
Ingestion-layer exceptions for ticket workbook uploads.
"""

from __future__ import annotations

from typing import Any


class TicketMetricsError(Exception):
    """Base exception for ticket metrics ingestion failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
        }


class UploadValidationError(TicketMetricsError, ValueError):
    """Raised when an upload fails surface checks before any parse attempt."""


class UnparseableWorkbookError(TicketMetricsError):
    """Raised when upload bytes cannot be opened as a workbook with a readable first sheet."""
