"""Tests for raw cell to SQL value coercion."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from xlsx2sql.models import (
    NULL,
    SqlBoolean,
    SqlDateTime,
    SqlInteger,
    SqlNull,
    SqlNumber,
    SqlText,
)
from xlsx2sql.services.coercion import (
    SPREADSHEET_EPOCH,
    coerce,
    coerce_row,
    excel_serial_to_datetime,
)
from xlsx2sql.workbook import (
    EMPTY,
    BoolCell,
    DateTimeCell,
    DateTimeIsoCell,
    DurationIsoCell,
    ErrorCell,
    FloatCell,
    IntCell,
    TextCell,
)


class TestCoerceScalars:
    """Tests for the non-date cell kinds."""

    def test_empty_is_null(self) -> None:
        assert coerce(EMPTY) == NULL
        assert isinstance(coerce(EMPTY), SqlNull)

    def test_text_is_copied_verbatim(self) -> None:
        assert coerce(TextCell("  padded  ")) == SqlText("  padded  ")

    def test_empty_text_stays_text(self) -> None:
        assert coerce(TextCell("")) == SqlText("")

    def test_float(self) -> None:
        assert coerce(FloatCell(3.14)) == SqlNumber(3.14)

    def test_integer(self) -> None:
        assert coerce(IntCell(-42)) == SqlInteger(-42)

    @pytest.mark.parametrize("flag", [True, False])
    def test_boolean(self, flag: bool) -> None:
        assert coerce(BoolCell(flag)) == SqlBoolean(flag)

    @pytest.mark.parametrize("code", ["#DIV/0!", "#N/A", "#REF!", "#VALUE!"])
    def test_error_marker_degrades_to_null(self, code: str) -> None:
        assert coerce(ErrorCell(code)) == NULL

    def test_iso_datetime_is_copied_verbatim(self) -> None:
        assert coerce(DateTimeIsoCell("2024-02-29T08:15:00")) == SqlDateTime(
            "2024-02-29T08:15:00"
        )

    def test_iso_duration_becomes_text(self) -> None:
        assert coerce(DurationIsoCell("PT1H30M")) == SqlText("PT1H30M")


class TestCoerceDateSerial:
    """Tests for spreadsheet serial date decoding."""

    def test_half_day_serial(self) -> None:
        assert coerce(DateTimeCell(44927.5)) == SqlDateTime("2023-01-01 12:00:00")

    def test_serial_zero_is_epoch(self) -> None:
        assert coerce(DateTimeCell(0.0)) == SqlDateTime("1899-12-30 00:00:00")

    def test_quarter_day(self) -> None:
        assert coerce(DateTimeCell(1.25)) == SqlDateTime("1899-12-31 06:00:00")

    def test_time_only_serial(self) -> None:
        # 0.75 of a day, no date part
        assert coerce(DateTimeCell(0.75)) == SqlDateTime("1899-12-30 18:00:00")

    def test_seconds_are_rounded(self) -> None:
        serial = 44927 + 1.4 / 86400
        assert coerce(DateTimeCell(serial)) == SqlDateTime("2023-01-01 00:00:01")

    def test_fraction_rounding_to_full_day_rolls_over(self) -> None:
        assert coerce(DateTimeCell(45000.9999999999)) == SqlDateTime(
            "2023-03-16 00:00:00"
        )

    def test_negative_serial_counts_back_from_epoch(self) -> None:
        assert coerce(DateTimeCell(-1.5)) == SqlDateTime("1899-12-28 12:00:00")

    def test_leap_day(self) -> None:
        assert coerce(DateTimeCell(45351.0)) == SqlDateTime("2024-02-29 00:00:00")

    @pytest.mark.parametrize("serial", [1e10, -1e10, 3_000_000.0])
    def test_overflow_falls_back_to_number(self, serial: float) -> None:
        assert coerce(DateTimeCell(serial)) == SqlNumber(serial)

    @pytest.mark.parametrize("serial", [math.inf, -math.inf])
    def test_infinite_serial_falls_back_to_number(self, serial: float) -> None:
        assert coerce(DateTimeCell(serial)) == SqlNumber(serial)

    def test_nan_serial_falls_back_to_number(self) -> None:
        result = coerce(DateTimeCell(math.nan))
        assert isinstance(result, SqlNumber)
        assert math.isnan(result.value)


class TestExcelSerialToDatetime:
    """Tests for the standalone serial decoder."""

    def test_epoch(self) -> None:
        assert SPREADSHEET_EPOCH == datetime(1899, 12, 30)
        assert excel_serial_to_datetime(0) == SPREADSHEET_EPOCH

    def test_decodes_known_date(self) -> None:
        assert excel_serial_to_datetime(44927.5) == datetime(2023, 1, 1, 12, 0, 0)

    def test_raises_on_overflow(self) -> None:
        with pytest.raises(OverflowError):
            excel_serial_to_datetime(1e10)

    def test_raises_on_nan(self) -> None:
        with pytest.raises(ValueError):
            excel_serial_to_datetime(math.nan)


class TestCoerceRow:
    def test_preserves_order_and_length(self) -> None:
        row = (IntCell(1), TextCell("Ann"), EMPTY, BoolCell(True))
        assert coerce_row(row) == (
            SqlInteger(1),
            SqlText("Ann"),
            NULL,
            SqlBoolean(True),
        )
