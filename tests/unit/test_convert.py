"""Unit tests for column value conversion."""

from __future__ import annotations

import datetime
from decimal import Decimal
from enum import Enum

import pytest

from row_persist.core.exceptions import ValueConversionError
from row_persist.mapping.convert import convert_value, unwrap_optional


class Status(Enum):
    OPEN = "open"
    CLOSED = "closed"


class TestConvertValue:
    def test_none_passes_through(self) -> None:
        assert convert_value(None, int, "c") is None

    def test_untyped_passes_through(self) -> None:
        assert convert_value("x", None, "c") == "x"

    def test_optional_unwrapped(self) -> None:
        assert unwrap_optional(int | None) is int
        assert convert_value(3.0, int | None, "c") == 3

    def test_integral_float_to_int(self) -> None:
        assert convert_value(3.0, int, "c") == 3

    def test_fractional_float_to_int_rejected(self) -> None:
        with pytest.raises(ValueConversionError) as exc_info:
            convert_value(3.5, int, "amount")
        assert exc_info.value.column == "amount"

    def test_decimal_to_int(self) -> None:
        assert convert_value(Decimal("12"), int, "c") == 12
        with pytest.raises(ValueConversionError):
            convert_value(Decimal("12.5"), int, "c")

    def test_int_widens_to_float_and_decimal(self) -> None:
        assert convert_value(2, float, "c") == 2.0
        assert convert_value(2, Decimal, "c") == Decimal(2)
        assert convert_value(0.1, Decimal, "c") == Decimal("0.1")

    def test_bool_from_zero_or_one(self) -> None:
        assert convert_value(1, bool, "c") is True
        assert convert_value(0, bool, "c") is False
        with pytest.raises(ValueConversionError):
            convert_value(2, bool, "c")

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(ValueConversionError):
            convert_value(True, int, "c")

    def test_string_to_int(self) -> None:
        assert convert_value("42", int, "c") == 42
        with pytest.raises(ValueConversionError):
            convert_value("forty", int, "c")

    def test_bytes_to_str(self) -> None:
        assert convert_value(b"abc", str, "c") == "abc"

    def test_iso_dates(self) -> None:
        assert convert_value("2024-03-01", datetime.date, "c") == datetime.date(2024, 3, 1)
        assert convert_value(
            "2024-03-01T10:30:00", datetime.datetime, "c"
        ) == datetime.datetime(2024, 3, 1, 10, 30)
        assert convert_value(
            datetime.datetime(2024, 3, 1, 10, 30), datetime.date, "c"
        ) == datetime.date(2024, 3, 1)

    def test_enum_by_value(self) -> None:
        assert convert_value("open", Status, "c") is Status.OPEN
        with pytest.raises(ValueConversionError):
            convert_value("archived", Status, "c")

    def test_unrelated_type_rejected(self) -> None:
        with pytest.raises(ValueConversionError):
            convert_value([1], int, "c")
