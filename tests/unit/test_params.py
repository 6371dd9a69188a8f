"""Unit tests for placeholder helpers."""

from __future__ import annotations

import pytest

from row_persist.core.exceptions import PlaceholderMismatchError
from row_persist.core.params import (
    assert_placeholder_count,
    count_placeholders,
    normalize_params,
)


class TestCountPlaceholders:
    def test_counts_question_marks(self) -> None:
        assert count_placeholders("SELECT * FROM t WHERE a=? AND b=?") == 2

    def test_ignores_string_literals(self) -> None:
        assert count_placeholders("SELECT '?' AS q, 'it''s ?' FROM t WHERE a=?") == 1

    def test_empty(self) -> None:
        assert count_placeholders("") == 0
        assert count_placeholders(None) == 0


class TestAssertPlaceholderCount:
    def test_matching(self) -> None:
        assert_placeholder_count("UPDATE t SET a=? WHERE id=?", [1, 2])

    def test_mismatch(self) -> None:
        with pytest.raises(PlaceholderMismatchError) as exc_info:
            assert_placeholder_count("UPDATE t SET a=? WHERE id=?", [1])
        assert exc_info.value.expected == 2
        assert exc_info.value.found == 1


class TestNormalizeParams:
    def test_qmark_unchanged(self) -> None:
        sql = "SELECT * FROM t WHERE id = ?"
        assert normalize_params(sql, "qmark") == sql

    def test_format_conversion(self) -> None:
        sql = "SELECT * FROM t WHERE id = ? AND name = ?"
        assert normalize_params(sql, "format") == "SELECT * FROM t WHERE id = %s AND name = %s"

    def test_format_escapes_percent(self) -> None:
        sql = "SELECT * FROM t WHERE name LIKE '50%?' AND id = ?"
        assert normalize_params(sql, "format") == (
            "SELECT * FROM t WHERE name LIKE '50%%?' AND id = %s"
        )
