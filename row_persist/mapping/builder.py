"""Mapping descriptor DSL builder.

Provides a fluent builder for declaring entity mappings explicitly::

    descriptor = (
        mapping(Invoice)
        .table("invoice")
        .primary_key("inv_key")
        .field("total")
        .field("customer_name", "cust_name")
        .reference("customer", Customer, column="cust_id")
        .ref_value("supplier_ref", "supplier_id", label="sup_name")
        .build()
    )
    registry.register(descriptor)

Annotated dataclasses are resolved through the same builder.
"""

from __future__ import annotations

import dataclasses
import inspect
from dataclasses import dataclass
from typing import Any

from row_persist.core.enums import FieldKind
from row_persist.core.exceptions import DescriptorError
from row_persist.mapping.convert import resolve_type_hints
from row_persist.mapping.descriptor import FieldBinding, MappingDescriptor
from row_persist.mapping.keys import Model, RefValue


def default_column_name(attribute: str) -> str:
    """Column name for an attribute with no explicit column: the attribute lowercased."""
    return attribute.lower()


def mapping(entity_type: type) -> MappingBuilder:
    """Entry point for the mapping DSL.

    Args:
        entity_type: The Model subclass being mapped.

    Returns:
        A builder for chaining mapping declarations.
    """
    return MappingBuilder(entity_type)


def _known_attributes(entity_type: type, hints: dict[str, Any]) -> set[str]:
    """Attribute names an instance of *entity_type* is built with."""
    known = set(hints)
    if dataclasses.is_dataclass(entity_type):
        known.update(f.name for f in dataclasses.fields(entity_type))
    try:
        parameters = inspect.signature(entity_type.__init__).parameters
    except (TypeError, ValueError):
        return known
    known.update(
        name
        for name, parameter in parameters.items()
        if name != "self"
        and parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
    )
    return known


@dataclass(frozen=True)
class _Declared:
    attribute: str
    column: str | None
    kind: FieldKind
    value_type: Any = None
    referenced_type: type | None = None
    label_column: str | None = None
    prefix: str = ""


class MappingBuilder:
    """Fluent builder for entity mapping definitions."""

    def __init__(self, entity_type: type) -> None:
        self._entity_type = entity_type
        self._table: str | None = None
        self._primary_key: str | None = None
        self._declared: list[_Declared] = []

    @property
    def _name(self) -> str:
        return getattr(self._entity_type, "__name__", repr(self._entity_type))

    def table(self, name: str) -> MappingBuilder:
        """Set the table name."""
        self._table = name
        return self

    def primary_key(self, column: str) -> MappingBuilder:
        """Set the primary-key column."""
        self._primary_key = column
        return self

    def field(
        self,
        attribute: str,
        column: str | None = None,
        *,
        value_type: Any = None,
    ) -> MappingBuilder:
        """Map a scalar attribute; the column defaults to the attribute lowercased."""
        self._declared.append(
            _Declared(attribute, column or default_column_name(attribute), FieldKind.SCALAR, value_type)
        )
        return self

    def reference(
        self,
        attribute: str,
        entity_type: type,
        *,
        column: str | None = None,
        prefix: str = "",
    ) -> MappingBuilder:
        """Declare an embedded reference to another mapped entity.

        The foreign-key column defaults to the referenced type's primary key.
        """
        self._declared.append(
            _Declared(
                attribute,
                column,
                FieldKind.REFERENCE,
                value_type=entity_type,
                referenced_type=entity_type,
                prefix=prefix,
            )
        )
        return self

    def ref_value(
        self,
        attribute: str,
        column: str,
        *,
        label: str | None = None,
    ) -> MappingBuilder:
        """Declare a RefValue projection: a foreign-key column plus an optional label column."""
        self._declared.append(
            _Declared(
                attribute,
                column,
                FieldKind.REFERENCE,
                value_type=RefValue,
                referenced_type=RefValue,
                label_column=label,
            )
        )
        return self

    def build(self) -> MappingDescriptor:
        """Compile and validate the mapping into a MappingDescriptor."""
        if not isinstance(self._entity_type, type) or not issubclass(self._entity_type, Model):
            raise DescriptorError(self._name, "mapped types must subclass Model")
        if not self._table or not self._table.strip():
            raise DescriptorError(self._name, "no table name declared")
        if not self._primary_key or not self._primary_key.strip():
            raise DescriptorError(self._name, "no primary key declared")

        hints = resolve_type_hints(self._entity_type)
        known = _known_attributes(self._entity_type, hints)
        pk = self._primary_key
        bindings: list[FieldBinding] = []
        key_binding: FieldBinding | None = None

        for declared in self._declared:
            if declared.attribute not in known and not hasattr(self._entity_type, declared.attribute):
                raise DescriptorError(
                    self._name, f"'{declared.attribute}' is not an attribute of {self._name}"
                )
            binding = self._compile(declared, hints)
            if binding.column.lower() == pk.lower():
                if binding.kind is not FieldKind.SCALAR:
                    raise DescriptorError(
                        self._name,
                        f"primary key '{pk}' cannot be matched to reference "
                        f"field '{declared.attribute}'",
                    )
                binding = FieldBinding(
                    column=pk,
                    attribute=binding.attribute,
                    kind=FieldKind.PRIMARY_KEY,
                    value_type=binding.value_type,
                )
                key_binding = binding
            bindings.append(binding)

        if key_binding is None:
            bindings.insert(0, FieldBinding(column=pk, attribute=None, kind=FieldKind.PRIMARY_KEY))

        return MappingDescriptor(
            entity_type=self._entity_type,
            table=self._table,
            primary_key=pk,
            fields=tuple(bindings),
        )

    def _compile(self, declared: _Declared, hints: dict[str, Any]) -> FieldBinding:
        if declared.kind is FieldKind.SCALAR:
            return FieldBinding(
                column=declared.column or default_column_name(declared.attribute),
                attribute=declared.attribute,
                kind=FieldKind.SCALAR,
                value_type=declared.value_type or hints.get(declared.attribute),
            )

        if declared.referenced_type is RefValue:
            if not declared.column:
                raise DescriptorError(
                    self._name, f"RefValue field '{declared.attribute}' requires a column"
                )
            return FieldBinding(
                column=declared.column,
                attribute=declared.attribute,
                kind=FieldKind.REFERENCE,
                value_type=RefValue,
                referenced_type=RefValue,
                label_column=declared.label_column,
            )

        target = declared.referenced_type
        if not isinstance(target, type) or not issubclass(target, Model):
            raise DescriptorError(
                self._name,
                f"reference '{declared.attribute}' must target a Model subclass, got {target!r}",
            )
        column = declared.column or getattr(target, "__primary_key__", None)
        if not column:
            raise DescriptorError(
                self._name,
                f"reference '{declared.attribute}' needs a column: "
                f"{target.__name__} declares no primary key",
            )
        return FieldBinding(
            column=column,
            attribute=declared.attribute,
            kind=FieldKind.REFERENCE,
            value_type=target,
            referenced_type=target,
            prefix=declared.prefix,
        )
