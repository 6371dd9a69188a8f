"""Mapping descriptor data classes.

Frozen dataclasses describing how one entity type maps to a table.
Produced by the builder or the annotation resolver, cached by the
DescriptorRegistry, and read by the row mapper and clause builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from row_persist.core.enums import FieldKind
from row_persist.core.exceptions import DescriptorError, MappingError
from row_persist.mapping.keys import RefValue


@dataclass(frozen=True)
class FieldBinding:
    """Association between one entity attribute and one column."""

    column: str
    attribute: str | None  # None only for a key column with no declared attribute
    kind: FieldKind
    value_type: Any = None
    referenced_type: type | None = None
    label_column: str | None = None  # RefValue only
    prefix: str = ""  # embedded references only

    @property
    def is_ref_value(self) -> bool:
        return self.kind is FieldKind.REFERENCE and self.referenced_type is RefValue

    @property
    def is_embedded(self) -> bool:
        return self.kind is FieldKind.REFERENCE and self.referenced_type is not RefValue

    def get(self, instance: Any) -> Any:
        if self.attribute is None:
            return instance.key.value
        return getattr(instance, self.attribute)

    def set(self, instance: Any, value: Any) -> None:
        if self.attribute is not None:
            setattr(instance, self.attribute, value)


@dataclass(frozen=True)
class MappingDescriptor:
    """Compiled, validated mapping of an entity type to a table."""

    entity_type: type
    table: str
    primary_key: str
    fields: tuple[FieldBinding, ...]
    _by_column: dict[str, FieldBinding] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        by_column: dict[str, FieldBinding] = {}
        for binding in self.fields:
            name = binding.column.lower()
            if name in by_column:
                raise DescriptorError(
                    self.entity_type.__name__, f"column '{binding.column}' is bound twice"
                )
            by_column[name] = binding

        key_bindings = [b for b in self.fields if b.kind is FieldKind.PRIMARY_KEY]
        if len(key_bindings) != 1:
            raise DescriptorError(
                self.entity_type.__name__,
                f"expected exactly one primary key binding, found {len(key_bindings)}",
            )
        if key_bindings[0].column.lower() != self.primary_key.lower():
            raise DescriptorError(
                self.entity_type.__name__,
                f"primary key binding '{key_bindings[0].column}' does not match "
                f"'{self.primary_key}'",
            )
        object.__setattr__(self, "_by_column", by_column)

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    @property
    def primary_key_binding(self) -> FieldBinding:
        return self._by_column[self.primary_key.lower()]

    @property
    def column_names(self) -> list[str]:
        return [binding.column for binding in self.fields]

    def binding_for(self, column: str) -> FieldBinding:
        """Look up the binding for *column* (case-insensitive)."""
        try:
            return self._by_column[column.lower()]
        except KeyError:
            raise MappingError(f"{self.entity_name} has no binding for column '{column}'") from None

    def bindings(self, kind: FieldKind) -> list[FieldBinding]:
        return [binding for binding in self.fields if binding.kind is kind]

    def writable_bindings(self) -> list[FieldBinding]:
        """Non-key bindings sorted by column name: the column order of write clauses."""
        return sorted(
            (binding for binding in self.fields if binding.kind is not FieldKind.PRIMARY_KEY),
            key=lambda binding: binding.column,
        )
