"""SQL clause synthesis from entity metadata.

Write clauses list columns in lexicographic order and emit values in exactly
the rendered order; callers bind ``values`` positionally to the `?`
placeholders.

    insert_clause  -> "(c1,c2) VALUES (?,?)"
    update_clause  -> "SET c1=?,c2=? WHERE pk=?"   (key value last)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from row_persist.core.exceptions import EmptyClauseError, MappingError, UnpersistedEntityError
from row_persist.mapping.descriptor import FieldBinding, MappingDescriptor
from row_persist.mapping.keys import Model


@dataclass(frozen=True)
class InsertClause:
    """Column list and placeholders for an INSERT, with ordered values."""

    columns: str
    placeholders: str
    values: tuple[Any, ...]

    @property
    def clause(self) -> str:
        return f"{self.columns} VALUES {self.placeholders}"


@dataclass(frozen=True)
class UpdateClause:
    """SET list and WHERE condition for an UPDATE, with ordered values."""

    set_sql: str
    where_sql: str
    values: tuple[Any, ...]

    @property
    def clause(self) -> str:
        return f"{self.set_sql} {self.where_sql}"


@dataclass(frozen=True)
class DeleteClause:
    """WHERE condition on the primary key, with its single value."""

    where_sql: str
    values: tuple[Any, ...]


def _check_instance(descriptor: MappingDescriptor, entity: Any) -> None:
    if not isinstance(entity, descriptor.entity_type):
        raise MappingError(
            f"Expected an instance of {descriptor.entity_name}, got {type(entity).__name__}"
        )


def _column_value(binding: FieldBinding, entity: Any) -> Any:
    """Value written for *binding*: scalars as-is, references as their foreign key."""
    value = binding.get(entity)
    if binding.is_ref_value:
        return None if value is None else value.ref.value
    if binding.is_embedded:
        if not isinstance(value, Model) or not value.key.is_present:
            return None
        return value.key.value
    return value


def _write_columns(descriptor: MappingDescriptor, entity: Any) -> tuple[list[str], list[Any]]:
    _check_instance(descriptor, entity)
    bindings = descriptor.writable_bindings()
    if not bindings:
        raise EmptyClauseError(descriptor.entity_name)
    columns = [binding.column for binding in bindings]
    values = [_column_value(binding, entity) for binding in bindings]
    return columns, values


def insert_clause(descriptor: MappingDescriptor, entity: Any) -> InsertClause:
    """Build the column list and VALUES placeholders for inserting *entity*.

    The primary-key column is never included.

    Raises:
        EmptyClauseError: If the entity has no writable columns.
    """
    columns, values = _write_columns(descriptor, entity)
    return InsertClause(
        columns="(" + ",".join(columns) + ")",
        placeholders="(" + ",".join("?" * len(columns)) + ")",
        values=tuple(values),
    )


def update_clause(descriptor: MappingDescriptor, entity: Any) -> UpdateClause:
    """Build the SET list and key condition for updating *entity*.

    Raises:
        UnpersistedEntityError: If the entity's key is ``Key.NONE``.
        EmptyClauseError: If the entity has no writable columns.
    """
    _check_instance(descriptor, entity)
    if not entity.key.is_present:
        raise UnpersistedEntityError(descriptor.entity_name, "update")
    columns, values = _write_columns(descriptor, entity)
    return UpdateClause(
        set_sql="SET " + ",".join(f"{column}=?" for column in columns),
        where_sql=f"WHERE {descriptor.primary_key}=?",
        values=(*values, entity.key.value),
    )


def delete_clause(descriptor: MappingDescriptor, entity: Any) -> DeleteClause:
    """``WHERE pk=?`` for a persisted entity (used by DELETE)."""
    _check_instance(descriptor, entity)
    if not entity.key.is_present:
        raise UnpersistedEntityError(descriptor.entity_name, "delete")
    return DeleteClause(where_sql=f"WHERE {descriptor.primary_key}=?", values=(entity.key.value,))


def select_clause(descriptor: MappingDescriptor) -> str:
    """Select list: the primary key followed by the writable columns in sorted order.

    Columns are not aliased to attribute names; the row mapper reads them by
    column name.
    """
    columns = [descriptor.primary_key]
    columns.extend(binding.column for binding in descriptor.writable_bindings())
    return ",".join(columns)
