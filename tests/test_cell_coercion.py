from __future__ import annotations

from datetime import date, datetime, time

import openpyxl
import pytest
from openpyxl.utils.datetime import MAC_EPOCH

from app.validators.cell_coercion import (
    BLANK_CELL,
    CellKind,
    RawCell,
    as_number,
    as_text,
    as_timestamp,
)


def _cell(value, **kwargs) -> RawCell:
    return RawCell.from_value(value, **kwargs)


class TestClassification:
    def test_none_is_blank(self) -> None:
        assert _cell(None) is BLANK_CELL

    def test_bool_is_not_a_number(self) -> None:
        assert _cell(True).kind is CellKind.BOOLEAN

    def test_datetime_and_date_are_dates(self) -> None:
        assert _cell(datetime(2024, 1, 1)).kind is CellKind.DATE
        assert _cell(date(2024, 1, 1)).kind is CellKind.DATE

    def test_formula_text_without_cache(self) -> None:
        assert _cell("=A1+B1").kind is CellKind.FORMULA

    def test_from_openpyxl_cells(self) -> None:
        sheet = openpyxl.Workbook().active
        sheet["A1"] = "=SUM(1,2)"
        sheet["A2"] = datetime(2024, 3, 4, 5, 6)
        sheet["A3"] = 5
        sheet["A3"].number_format = "yyyy-mm-dd"
        sheet["A4"] = "#N/A"
        sheet["A5"] = "plain"

        assert RawCell.from_openpyxl(sheet["A1"]).kind is CellKind.FORMULA
        assert RawCell.from_openpyxl(sheet["A2"]).kind is CellKind.DATE
        serial = RawCell.from_openpyxl(sheet["A3"])
        assert serial.kind is CellKind.NUMBER
        assert serial.is_date_formatted is True
        assert RawCell.from_openpyxl(sheet["A4"]).kind is CellKind.ERROR
        assert RawCell.from_openpyxl(sheet["A5"]).kind is CellKind.TEXT
        assert RawCell.from_openpyxl(sheet["B9"]) is BLANK_CELL
        assert RawCell.from_openpyxl(None) is BLANK_CELL


class TestAsText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("  INC-1 ", "INC-1"),
            ("   ", None),
            ("", None),
            (12, "12"),
            (1.5, "1.5"),
            (True, "true"),
            (False, "false"),
            (datetime(2024, 1, 2, 3, 4), "2024-01-02T03:04:00"),
            (None, None),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert as_text(_cell(value)) == expected

    def test_missing_cell(self) -> None:
        assert as_text(None) is None

    def test_error_cell_is_absent(self) -> None:
        assert as_text(RawCell(CellKind.ERROR, "#DIV/0!")) is None

    def test_formula_uses_cached_text(self) -> None:
        cell = RawCell(CellKind.FORMULA, '=A1&"-9"', cached="T-9")
        assert as_text(cell) == "T-9"

    def test_formula_without_cache_is_absent(self) -> None:
        assert as_text(RawCell(CellKind.FORMULA, "=A1")) is None


class TestAsNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (4, 4.0),
            (2.5, 2.5),
            ("1,234.5", 1234.5),
            (" 7 ", 7.0),
            ("-3", -3.0),
            ("1e2", 100.0),
        ],
    )
    def test_parses(self, value, expected) -> None:
        assert as_number(_cell(value)) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["abc", "", "nan", "inf", "1_000", "12h", True, None])
    def test_rejects_without_raising(self, value) -> None:
        assert as_number(_cell(value)) is None

    def test_date_is_not_a_number(self) -> None:
        assert as_number(_cell(datetime(2024, 1, 1))) is None

    def test_formula_uses_cached_number(self) -> None:
        assert as_number(RawCell(CellKind.FORMULA, "=2*21", cached=42)) == 42.0


class TestAsTimestamp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-01T10:30:00", datetime(2024, 1, 1, 10, 30)),
            ("2024-01-01T10:30", datetime(2024, 1, 1, 10, 30)),
            ("2024-01-01", datetime(2024, 1, 1)),
            (" 2024-02-29 ", datetime(2024, 2, 29)),
            ("2024-01-01T10:30:00Z", datetime(2024, 1, 1, 10, 30)),
            ("2024-01-01T12:00:00+02:00", datetime(2024, 1, 1, 10, 0)),
        ],
    )
    def test_text(self, value, expected) -> None:
        assert as_timestamp(_cell(value)) == expected

    @pytest.mark.parametrize("value", ["not a date", "2024-13-01", "2023-02-29", "", "01/02/2024", 12.5])
    def test_unparseable_is_none(self, value) -> None:
        assert as_timestamp(_cell(value)) is None

    def test_datetime_passthrough(self) -> None:
        value = datetime(2024, 5, 6, 7, 8, 9)
        assert as_timestamp(_cell(value)) == value

    def test_date_becomes_midnight(self) -> None:
        assert as_timestamp(_cell(date(2024, 5, 6))) == datetime(2024, 5, 6)

    def test_time_only_is_none(self) -> None:
        assert as_timestamp(_cell(time(10, 30))) is None

    def test_date_formatted_serial_uses_windows_epoch(self) -> None:
        assert as_timestamp(_cell(45292, is_date_formatted=True)) == datetime(2024, 1, 1)

    def test_date_formatted_serial_uses_mac_epoch(self) -> None:
        cell = _cell(43830, is_date_formatted=True)
        assert as_timestamp(cell, epoch=MAC_EPOCH) == datetime(2024, 1, 1)

    def test_out_of_range_serial_is_none(self) -> None:
        assert as_timestamp(_cell(1e12, is_date_formatted=True)) is None

    def test_formula_without_cache_is_none(self) -> None:
        assert as_timestamp(RawCell(CellKind.FORMULA, "=TODAY()")) is None

