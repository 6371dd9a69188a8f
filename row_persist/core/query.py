"""Composable raw-SQL query.

SqlQuery only concatenates caller-written fragments and collects their
positional values in rendering order. It performs no SQL analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from row_persist.core.enums import Direction
from row_persist.core.exceptions import QueryStateError


@dataclass(frozen=True)
class _Fragment:
    sql: str
    values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class _Condition:
    fragment: str
    values: tuple[Any, ...]
    connective: str | None = None
    raw: bool = False

    def render(self, first: bool) -> str:
        if self.raw or first or not self.connective:
            return self.fragment
        return f"{self.connective} {self.fragment}"


def _normalize(fragment: str | None) -> str:
    if fragment is None:
        raise ValueError("Clause must not be None")
    return fragment.strip()


def _values(values: tuple[Any, ...]) -> tuple[Any, ...]:
    # A lone None means "no values", not a single NULL parameter.
    if len(values) == 1 and values[0] is None:
        return ()
    return values


class SqlQuery:
    """Raw or composed SQL text with ordered positional values.

    Raw queries (``SqlQuery.raw(sql, *values)``) are immutable. Composed
    queries render ``select``, body clauses, ``WHERE``, ``ORDER BY``,
    ``LIMIT`` and ``OFFSET`` in that order; values follow body clauses then
    where conditions.
    """

    def __init__(self) -> None:
        self._raw_sql: str | None = None
        self._raw_values: tuple[Any, ...] = ()
        self._select: str | None = None
        self._body: list[_Fragment] = []
        self._where: list[_Condition] = []
        self._order: list[str] = []
        self._limit: int | None = None
        self._offset: int | None = None

    @classmethod
    def raw(cls, sql: str, *values: Any) -> SqlQuery:
        if sql is None:
            raise ValueError("SQL must not be None")
        query = cls()
        query._raw_sql = sql
        query._raw_values = tuple(values)
        return query

    @property
    def is_raw(self) -> bool:
        return self._raw_sql is not None

    def _ensure_composable(self) -> None:
        if self.is_raw:
            raise QueryStateError("Cannot mutate a raw SqlQuery")

    # --- composition ---

    def clause(self, clause: str, *values: Any) -> SqlQuery:
        self._ensure_composable()
        self._body.append(_Fragment(_normalize(clause), _values(values)))
        return self

    def select(self, select: str) -> SqlQuery:
        self._ensure_composable()
        self._select = _normalize(select)
        return self

    def select_columns(self, *columns: str) -> SqlQuery:
        self._ensure_composable()
        self._select = "SELECT " + self._join_columns(columns)
        return self

    def select_distinct(self, *columns: str) -> SqlQuery:
        self._ensure_composable()
        self._select = "SELECT DISTINCT " + self._join_columns(columns)
        return self

    @staticmethod
    def _join_columns(columns: tuple[str, ...]) -> str:
        names = [column.strip() for column in columns if column and column.strip()]
        if not names:
            raise ValueError("At least one column must be specified")
        return ", ".join(names)

    def from_(self, table_expression: str) -> SqlQuery:
        return self.clause("FROM " + table_expression)

    def join(self, join_expression: str) -> SqlQuery:
        return self.clause(join_expression)

    def where(self, fragment: str, *values: Any) -> SqlQuery:
        self._ensure_composable()
        self._where.append(_Condition(_normalize(fragment), _values(values)))
        return self

    def and_where(self, fragment: str, *values: Any) -> SqlQuery:
        return self._connect("AND", fragment, values)

    def or_where(self, fragment: str, *values: Any) -> SqlQuery:
        return self._connect("OR", fragment, values)

    def _connect(self, connective: str, fragment: str, values: tuple[Any, ...]) -> SqlQuery:
        self._ensure_composable()
        if not self._where:
            raise QueryStateError(
                f"{connective.lower()}_where requires at least one preceding where condition"
            )
        self._where.append(_Condition(_normalize(fragment), _values(values), connective))
        return self

    def condition(self, clause: str, *values: Any) -> SqlQuery:
        """Append a where fragment verbatim, with no connective."""
        self._ensure_composable()
        self._where.append(_Condition(clause, _values(values), raw=True))
        return self

    def order_by(self, expression: str, direction: Direction | None = None) -> SqlQuery:
        self._ensure_composable()
        expression = _normalize(expression)
        if direction is not None:
            expression = f"{expression} {direction.value}"
        self._order.append(expression)
        return self

    def limit(self, max_rows: int) -> SqlQuery:
        self._ensure_composable()
        if max_rows < 0:
            raise ValueError("Limit must be non-negative")
        self._limit = max_rows
        return self

    def offset(self, rows: int) -> SqlQuery:
        self._ensure_composable()
        if rows < 0:
            raise ValueError("Offset must be non-negative")
        self._offset = rows
        return self

    def paginate(self, max_rows: int, start_at: int) -> SqlQuery:
        return self.limit(max_rows).offset(start_at)

    # --- rendering ---

    @property
    def sql(self) -> str:
        if self._raw_sql is not None:
            return self._raw_sql

        segments: list[str | None] = [self._select]
        segments.extend(fragment.sql for fragment in self._body)
        if self._where:
            rendered = " ".join(
                condition.render(position == 0) for position, condition in enumerate(self._where)
            )
            segments.append("WHERE " + rendered)
        if self._order:
            segments.append("ORDER BY " + ", ".join(self._order))
        if self._limit is not None:
            segments.append(f"LIMIT {self._limit}")
        if self._offset is not None:
            segments.append(f"OFFSET {self._offset}")
        return " ".join(segment.strip() for segment in segments if segment and segment.strip())

    @property
    def values(self) -> tuple[Any, ...]:
        if self._raw_sql is not None:
            return self._raw_values
        values: list[Any] = []
        for fragment in self._body:
            values.extend(fragment.values)
        for condition in self._where:
            values.extend(condition.values)
        return tuple(values)

    def __repr__(self) -> str:
        return f"SqlQuery(sql={self.sql!r}, values={self.values!r})"
