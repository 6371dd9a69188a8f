"""Mapper protocol.

Custom mappers passed to ``Repository.query`` implement this interface.
``map_row`` is called once per row with the row set positioned on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from row_persist.adapters.protocol import RowSet

T = TypeVar("T", covariant=True)


@runtime_checkable
class EntityMapper(Protocol[T]):
    """Base mapper protocol."""

    def map_row(self, row: RowSet, row_index: int | None = None) -> T | None:
        """Map the current row of *row* to a target object."""
        ...
