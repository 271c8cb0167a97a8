"""
app/validators/cell_coercion.py

Total conversion of raw spreadsheet cells into text, numbers and timestamps.

Every coercion returns ``None`` for blank, malformed or unsupported input
instead of raising, so one bad cell never aborts a batch.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any

from openpyxl.utils.datetime import WINDOWS_EPOCH, from_excel

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_BARE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# openpyxl cell.data_type codes
_FORMULA_TYPE = "f"
_ERROR_TYPE = "e"


class CellKind(str, Enum):
    """Apparent representation of one spreadsheet cell."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    FORMULA = "formula"
    ERROR = "error"
    BLANK = "blank"


@dataclass(frozen=True)
class RawCell:
    """
    Workbook-neutral view of one cell.

    ``cached`` holds the last computed result of a FORMULA cell when the
    workbook stored one.
    """

    kind: CellKind
    value: Any = None
    is_date_formatted: bool = False
    cached: Any = None

    @classmethod
    def from_value(cls, value: Any, *, is_date_formatted: bool = False) -> RawCell:
        """
        Classify a plain Python value as read from a workbook.
        """

        if value is None:
            return BLANK_CELL
        if isinstance(value, bool):
            return cls(CellKind.BOOLEAN, value)
        if isinstance(value, (datetime, date, time)):
            return cls(CellKind.DATE, value)
        if isinstance(value, (int, float)):
            return cls(CellKind.NUMBER, value, is_date_formatted=is_date_formatted)
        if isinstance(value, str):
            if value.startswith("="):
                return cls(CellKind.FORMULA, value)
            return cls(CellKind.TEXT, value)
        return cls(CellKind.FORMULA, value)

    @classmethod
    def from_openpyxl(cls, cell: Any) -> RawCell:
        """
        Build a RawCell from an openpyxl cell (regular, read-only or merged).
        """

        if cell is None:
            return BLANK_CELL
        value = getattr(cell, "value", None)
        if value is None:
            return BLANK_CELL

        data_type = getattr(cell, "data_type", None)
        if data_type == _ERROR_TYPE:
            return cls(CellKind.ERROR, value)
        if data_type == _FORMULA_TYPE:
            return cls(CellKind.FORMULA, value)
        if isinstance(value, str):
            return cls(CellKind.TEXT, value)
        return cls.from_value(value, is_date_formatted=bool(getattr(cell, "is_date", False)))

    def resolved(self) -> RawCell:
        """
        Return the cached result of a FORMULA cell, or BLANK when there is none.
        """

        if self.kind is not CellKind.FORMULA:
            return self
        cached = self.cached
        if isinstance(cached, bool) or not isinstance(cached, (str, int, float)):
            return BLANK_CELL
        if isinstance(cached, str):
            return RawCell(CellKind.TEXT, cached)
        return RawCell(CellKind.NUMBER, cached, is_date_formatted=self.is_date_formatted)


BLANK_CELL = RawCell(CellKind.BLANK)


def as_text(cell: RawCell | None) -> str | None:
    """
    Trimmed text of a cell; numbers via ``str()``, booleans as ``"true"``/``"false"``,
    dates as ISO-8601. Blank or whitespace-only text gives None.
    """

    if cell is None:
        return None
    cell = cell.resolved()

    if cell.kind is CellKind.TEXT:
        text = str(cell.value).strip()
        return text or None
    if cell.kind is CellKind.NUMBER:
        return str(cell.value)
    if cell.kind is CellKind.BOOLEAN:
        return "true" if cell.value else "false"
    if cell.kind is CellKind.DATE:
        return cell.value.isoformat()
    return None


def as_number(cell: RawCell | None) -> float | None:
    """
    Parse a numeric cell, or a text cell holding a decimal with optional
    thousands separators.
    """

    if cell is None:
        return None
    cell = cell.resolved()

    if cell.kind is CellKind.NUMBER:
        number = float(cell.value)
    elif cell.kind is CellKind.TEXT:
        raw = str(cell.value).strip().replace(",", "")
        if not _NUMBER_PATTERN.match(raw):
            return None
        try:
            number = float(raw)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def as_timestamp(cell: RawCell | None, *, epoch: datetime = WINDOWS_EPOCH) -> datetime | None:
    """
    Coerce a cell into a naive datetime.

    Date-formatted numbers are read as spreadsheet serials against the
    workbook's calendar ``epoch``. Text is tried as ISO-8601 first and then
    as a bare ``YYYY-MM-DD`` date at midnight.
    """

    if cell is None:
        return None
    cell = cell.resolved()

    if cell.kind is CellKind.DATE:
        return _to_naive_datetime(cell.value)
    if cell.kind is CellKind.NUMBER and cell.is_date_formatted:
        try:
            converted = from_excel(cell.value, epoch=epoch)
        except (OverflowError, ValueError, TypeError):
            return None
        return converted if isinstance(converted, datetime) else None
    if cell.kind is CellKind.TEXT:
        return parse_timestamp_text(str(cell.value))
    return None


def parse_timestamp_text(value: str) -> datetime | None:
    """
    Parse ISO-8601 text (trailing ``Z`` allowed) or a bare ``YYYY-MM-DD`` date.
    """

    raw = value.strip()
    if not raw:
        return None

    normalized = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        return _to_naive_datetime(datetime.fromisoformat(normalized))
    except ValueError:
        pass

    if _BARE_DATE_PATTERN.match(raw):
        try:
            return datetime.strptime(raw, "%Y-%m-%d")
        except ValueError:
            return None
    return None


def _to_naive_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None
