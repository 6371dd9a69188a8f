"""In-memory row set with a forward cursor.

Column lookup is by name, case-insensitive, and the first column with a
matching name wins. Joined `SELECT a.*, b.*` results can repeat names such
as `id`, and the leftmost table's column is used for those.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from row_persist.core.exceptions import ColumnMismatchError, RowSetError


class ResultRowSet:
    """Materialized result rows with `next()` / `get_column()` access.

    `current_row_index` is 1-based and is 0 before the first `next()` and
    after the cursor moves past the last row.

    Args:
        columns: Column labels in select-list order.
        rows: Row tuples aligned with *columns*.
    """

    def __init__(self, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        self._columns = tuple(columns)
        self._rows = [tuple(row) for row in rows]
        self._index: dict[str, int] = {}
        for position, name in enumerate(self._columns):
            self._index.setdefault(name.lower(), position)
        self._cursor = 0

    @classmethod
    def from_dicts(cls, rows: Sequence[Mapping[str, Any]]) -> ResultRowSet:
        """Build a row set from dict rows sharing the first row's keys."""
        if not rows:
            return cls((), ())
        columns = list(rows[0].keys())
        return cls(columns, [[row.get(column) for column in columns] for row in rows])

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def current_row_index(self) -> int:
        return self._cursor if 0 < self._cursor <= len(self._rows) else 0

    def __len__(self) -> int:
        return len(self._rows)

    def next(self) -> bool:
        """Advance to the next row; False once the rows are exhausted."""
        if self._cursor <= len(self._rows):
            self._cursor += 1
        return self._cursor <= len(self._rows)

    def has_column(self, name: str) -> bool:
        return name.lower() in self._index

    def get_column(self, name: str) -> Any:
        """Value of column *name* in the current row (None for SQL NULL)."""
        if self.current_row_index == 0:
            raise RowSetError("Row set has no current row")
        try:
            position = self._index[name.lower()]
        except KeyError:
            raise ColumnMismatchError("row set", [name]) from None
        return self._rows[self._cursor - 1][position]
