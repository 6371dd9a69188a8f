"""SQL executor and row set protocols.

The repository and row mapper only talk to the database through these
interfaces. Every executor module MUST implement them; statements use
positional `?` placeholders.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RowSet(Protocol):
    """Forward-only cursor over result rows with column-name lookup."""

    @property
    def columns(self) -> Sequence[str]:
        """Column labels in select-list order."""
        ...

    @property
    def current_row_index(self) -> int:
        """1-based index of the current row, 0 when there is no current row."""
        ...

    def next(self) -> bool:
        """Advance to the next row; False when exhausted."""
        ...

    def has_column(self, name: str) -> bool:
        """True if the row set has a column labelled *name* (case-insensitive)."""
        ...

    def get_column(self, name: str) -> Any:
        """Value of column *name* in the current row, None for SQL NULL."""
        ...


@runtime_checkable
class SqlExecutor(Protocol):
    """Parameterized statement execution."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Execute a write statement and return the affected row count."""
        ...

    def execute_insert(
        self,
        sql: str,
        params: Sequence[Any] = (),
        key_column: str | None = None,
    ) -> Any:
        """Execute an INSERT and return the generated key value (None if unavailable)."""
        ...

    def query(self, sql: str, params: Sequence[Any] = ()) -> RowSet:
        """Execute a SELECT and return its rows."""
        ...
