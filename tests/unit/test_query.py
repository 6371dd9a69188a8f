"""Unit tests for SqlQuery composition."""

from __future__ import annotations

import pytest

from row_persist.core.enums import Direction
from row_persist.core.exceptions import QueryStateError
from row_persist.core.query import SqlQuery


class TestRawQuery:
    def test_raw(self) -> None:
        query = SqlQuery.raw("SELECT * FROM t WHERE id=?", 5)
        assert query.is_raw
        assert query.sql == "SELECT * FROM t WHERE id=?"
        assert query.values == (5,)

    def test_raw_is_immutable(self) -> None:
        query = SqlQuery.raw("SELECT 1")
        with pytest.raises(QueryStateError):
            query.where("a=?", 1)

    def test_raw_keeps_single_null_value(self) -> None:
        assert SqlQuery.raw("SELECT ?", None).values == (None,)


class TestComposedQuery:
    def test_full_composition(self) -> None:
        query = (
            SqlQuery()
            .select_columns("po.id", "po.requester", "s.name AS supplier_name")
            .from_("purchase_order po")
            .join("LEFT JOIN supplier s ON s.id = po.supplier_id AND s.active = 1")
            .where("po.requester = ?", "Kotlin Request")
            .and_where("po.long_id > ?", 10)
            .or_where("po.long_id IS NULL")
            .order_by("po.id", Direction.DESC)
            .paginate(10, 20)
        )
        assert query.sql == (
            "SELECT po.id, po.requester, s.name AS supplier_name FROM purchase_order po "
            "LEFT JOIN supplier s ON s.id = po.supplier_id AND s.active = 1 "
            "WHERE po.requester = ? AND po.long_id > ? OR po.long_id IS NULL "
            "ORDER BY po.id desc LIMIT 10 OFFSET 20"
        )

    def test_values_follow_body_then_where(self) -> None:
        query = (
            SqlQuery()
            .select("SELECT *")
            .from_("t")
            .clause("JOIN u ON u.flag = ?", True)
            .where("a = ?", 1)
            .and_where("b IN (?, ?)", 2, 3)
        )
        assert query.values == (True, 1, 2, 3)

    def test_lone_none_means_no_values(self) -> None:
        query = SqlQuery().select("SELECT *").from_("t").where("a IS NULL", None)
        assert query.values == ()

    def test_where_only_clause(self) -> None:
        query = SqlQuery().where("requester = ?", "x").order_by("id")
        assert query.sql == "WHERE requester = ? ORDER BY id"

    def test_select_distinct(self) -> None:
        assert SqlQuery().select_distinct("a", " b ").sql == "SELECT DISTINCT a, b"

    def test_condition_is_verbatim(self) -> None:
        query = SqlQuery().where("a = 1").condition("AND (b = ? OR c = ?)", 1, 2)
        assert query.sql == "WHERE a = 1 AND (b = ? OR c = ?)"
        assert query.values == (1, 2)

    def test_and_where_requires_where(self) -> None:
        with pytest.raises(QueryStateError):
            SqlQuery().and_where("a = ?", 1)
        with pytest.raises(QueryStateError):
            SqlQuery().or_where("a = ?", 1)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            SqlQuery().limit(-1)
        with pytest.raises(ValueError):
            SqlQuery().offset(-1)
        with pytest.raises(ValueError):
            SqlQuery().select_columns()
        with pytest.raises(ValueError):
            SqlQuery().where(None)  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            SqlQuery.raw(None)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        assert "WHERE a = ?" in repr(SqlQuery().where("a = ?", 1))
