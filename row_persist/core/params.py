"""Positional parameter helpers.

Generated and caller-supplied SQL uses `?` placeholders. Drivers with the
'format' paramstyle (psycopg) need `%s` instead, with literal `%` doubled.
Single-quoted string literals are never treated as placeholders.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from row_persist.core.exceptions import PlaceholderMismatchError

# Matches single-quoted string literals ('' escapes included)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^']|'')*'")


def _split_literals(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_literal, text)`` segments."""
    parts: list[tuple[bool, str]] = []
    last_end = 0
    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append((False, sql[last_end:start]))
        parts.append((True, match.group()))
        last_end = end
    if last_end < len(sql):
        parts.append((False, sql[last_end:]))
    return parts


def count_placeholders(sql: str | None) -> int:
    """Count `?` placeholders outside string literals."""
    if not sql:
        return 0
    return sum(text.count("?") for literal, text in _split_literals(sql) if not literal)


def assert_placeholder_count(sql: str, values: Sequence[Any]) -> None:
    """Raise PlaceholderMismatchError unless *values* fills every placeholder in *sql*."""
    expected = count_placeholders(sql)
    if expected != len(values):
        raise PlaceholderMismatchError(sql, expected, len(values))


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert `?` placeholders to the target param style.

    Args:
        sql: SQL string with `?` placeholders.
        paramstyle: Target style - 'qmark' (no conversion) or 'format' (%s).

    Returns:
        SQL with placeholders converted to the target style.
    """
    if paramstyle == "qmark":
        return sql
    return _convert_to_format(sql)


@lru_cache(maxsize=256)
def _convert_to_format(sql: str) -> str:
    """Convert `?` to `%s`, escaping `%` everywhere and preserving string literals."""
    parts: list[str] = []
    for literal, text in _split_literals(sql):
        text = text.replace("%", "%%")
        if not literal:
            text = text.replace("?", "%s")
        parts.append(text)
    return "".join(parts)
