"""Declarative mapping annotations for dataclass entities.

Example::

    @table("purchase_order", primary_key="id")
    @dataclass
    class PurchaseOrder(Model):
        requester: str | None = None                    # column "requester"
        primitive_example_id: int | None = column("primitive_id")
        note: Note | None = reference()                 # column = Note's primary key
        supplier_ref: RefValue | None = reference("supplier_id", label="sup_name")
        scratch: str | None = transient()
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

METADATA_KEY = "row_persist"


@dataclass(frozen=True)
class ColumnSpec:
    """Field-level column annotation."""

    name: str | None = None
    skip: bool = False


@dataclass(frozen=True)
class ReferenceSpec:
    """Field-level reference annotation."""

    column: str | None = None
    label: str | None = None
    prefix: str = ""


def table(name: str, *, primary_key: str | None = None) -> Callable[[type[T]], type[T]]:
    """Class decorator declaring the table name and primary-key column."""

    def decorate(cls: type[T]) -> type[T]:
        cls.__table_name__ = name  # type: ignore[attr-defined]
        if primary_key is not None:
            cls.__primary_key__ = primary_key  # type: ignore[attr-defined]
        return cls

    return decorate


def column(name: str | None = None, *, default: Any = None) -> Any:
    """Dataclass field mapped to column *name*."""
    return dataclasses.field(default=default, metadata={METADATA_KEY: ColumnSpec(name)})


def reference(
    column: str | None = None,
    *,
    label: str | None = None,
    prefix: str = "",
    default: Any = None,
) -> Any:
    """Dataclass field holding an embedded entity or a RefValue.

    Args:
        column: Foreign-key column. Optional for embedded entities (defaults
            to the referenced type's primary key), required for RefValue.
        label: RefValue only - column holding the denormalized label.
        prefix: Prefix for the embedded entity's own columns in the row.
    """
    spec = ReferenceSpec(column=column, label=label, prefix=prefix)
    return dataclasses.field(default=default, metadata={METADATA_KEY: spec})


def transient(*, default: Any = None) -> Any:
    """Dataclass field excluded from mapping."""
    return dataclasses.field(default=default, metadata={METADATA_KEY: ColumnSpec(skip=True)})
