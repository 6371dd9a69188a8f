"""Unit tests for ResultRowSet."""

from __future__ import annotations

import pytest

from row_persist.core.exceptions import ColumnMismatchError, RowSetError
from row_persist.core.rowset import ResultRowSet


class TestResultRowSet:
    def test_cursor_walk(self) -> None:
        rows = ResultRowSet(["id", "name"], [(1, "a"), (2, "b")])
        assert rows.current_row_index == 0
        assert rows.next()
        assert rows.current_row_index == 1
        assert rows.get_column("name") == "a"
        assert rows.next()
        assert rows.get_column("id") == 2
        assert not rows.next()
        assert rows.current_row_index == 0
        assert not rows.next()

    def test_case_insensitive_lookup(self) -> None:
        rows = ResultRowSet(["ID", "Name"], [(1, "a")])
        rows.next()
        assert rows.has_column("id")
        assert rows.get_column("name") == "a"

    def test_first_duplicate_column_wins(self) -> None:
        rows = ResultRowSet(["id", "name", "id"], [(1, "a", 2)])
        rows.next()
        assert rows.get_column("id") == 1

    def test_no_current_row(self) -> None:
        rows = ResultRowSet(["id"], [(1,)])
        with pytest.raises(RowSetError):
            rows.get_column("id")

    def test_unknown_column(self) -> None:
        rows = ResultRowSet(["id"], [(1,)])
        rows.next()
        assert not rows.has_column("name")
        with pytest.raises(ColumnMismatchError):
            rows.get_column("name")

    def test_from_dicts(self) -> None:
        rows = ResultRowSet.from_dicts([{"id": 1, "name": "a"}, {"id": 2, "name": None}])
        assert rows.columns == ("id", "name")
        assert len(rows) == 2
        rows.next()
        rows.next()
        assert rows.get_column("name") is None

    def test_empty(self) -> None:
        rows = ResultRowSet.from_dicts([])
        assert not rows.next()
        assert rows.current_row_index == 0
