"""Column value conversion to declared field types.

Widening and exact conversions are applied; anything that would lose
information raises ValueConversionError. ``None`` always passes through.
"""

from __future__ import annotations

import datetime
import types
import typing
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union

from row_persist.core.exceptions import ValueConversionError


def resolve_type_hints(cls: type) -> dict[str, Any]:
    """Evaluated annotations for *cls*, or {} when they cannot be evaluated.

    Classes declared inside functions may reference names that are not
    module globals; those fields are then mapped without conversion.
    """
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return {}


def unwrap_optional(annotation: Any) -> Any:
    """``X | None`` -> ``X``; other unions and bare annotations are returned as-is."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def convert_value(value: Any, target: Any, column: str) -> Any:
    """Convert a column *value* to the declared *target* type."""
    if value is None:
        return None
    target = unwrap_optional(target)
    if not isinstance(target, type) or target is object:
        return value

    if target is bool:
        return _to_bool(value, column)
    if target is datetime.date and isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, target) and not (isinstance(value, bool) and target is not bool):
        return value

    try:
        if target is int:
            return _to_int(value, column)
        if target is float:
            if isinstance(value, (int, Decimal, str)) and not isinstance(value, bool):
                return float(value)
        elif target is Decimal:
            if isinstance(value, (int, str)) and not isinstance(value, bool):
                return Decimal(value)
            if isinstance(value, float):
                return Decimal(str(value))
        elif target is str:
            if isinstance(value, (bytes, bytearray)):
                return value.decode()
            if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
                return str(value)
        elif target is datetime.datetime:
            if isinstance(value, str):
                return datetime.datetime.fromisoformat(value)
        elif target is datetime.date:
            if isinstance(value, str):
                return _parse_date(value)
        elif issubclass(target, Enum):
            return target(value)
    except (ValueError, InvalidOperation, UnicodeDecodeError):
        raise ValueConversionError(column, value, target) from None

    raise ValueConversionError(column, value, target)


def _to_bool(value: Any, column: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueConversionError(column, value, bool)


def _to_int(value: Any, column: str) -> int:
    if isinstance(value, bool):
        raise ValueConversionError(column, value, int)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueConversionError(column, value, int)


def _parse_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        return datetime.datetime.fromisoformat(value).date()
