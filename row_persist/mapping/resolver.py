"""Annotation resolver: builds a MappingDescriptor from an annotated dataclass."""

from __future__ import annotations

import dataclasses

from row_persist.core.exceptions import DescriptorError
from row_persist.mapping.annotations import METADATA_KEY, ColumnSpec, ReferenceSpec
from row_persist.mapping.builder import mapping
from row_persist.mapping.convert import resolve_type_hints, unwrap_optional
from row_persist.mapping.descriptor import MappingDescriptor
from row_persist.mapping.keys import Model, RefValue


def _is_reference_type(annotation: object) -> bool:
    return annotation is RefValue or (
        isinstance(annotation, type) and issubclass(annotation, Model)
    )


def build_descriptor(entity_type: type) -> MappingDescriptor:
    """Introspect an annotated dataclass.

    The table name and primary key come from ``@table``. Fields use the
    column from ``column(...)``, the reference spec from ``reference(...)``,
    or their own name lowercased. ``transient()`` fields are skipped.

    Raises:
        DescriptorError: If required annotations are missing or a field
            cannot be bound.
    """
    name = getattr(entity_type, "__name__", repr(entity_type))
    if not isinstance(entity_type, type) or not issubclass(entity_type, Model):
        raise DescriptorError(name, "mapped types must subclass Model")

    table_name = getattr(entity_type, "__table_name__", None)
    if not table_name:
        raise DescriptorError(name, "missing @table name annotation")
    primary_key = getattr(entity_type, "__primary_key__", None)
    if not primary_key:
        raise DescriptorError(name, "missing primary key annotation")
    if not dataclasses.is_dataclass(entity_type):
        raise DescriptorError(
            name, "annotation mapping requires a dataclass; register others with mapping()"
        )

    hints = resolve_type_hints(entity_type)
    builder = mapping(entity_type).table(table_name).primary_key(primary_key)

    for dc_field in dataclasses.fields(entity_type):
        spec = dc_field.metadata.get(METADATA_KEY)
        if isinstance(spec, ColumnSpec) and spec.skip:
            continue

        declared = unwrap_optional(hints.get(dc_field.name))
        if isinstance(spec, ReferenceSpec):
            if declared is RefValue:
                if not spec.column:
                    raise DescriptorError(
                        name, f"RefValue field '{dc_field.name}' requires reference(column)"
                    )
                builder.ref_value(dc_field.name, spec.column, label=spec.label)
            elif isinstance(declared, type) and issubclass(declared, Model):
                builder.reference(
                    dc_field.name, declared, column=spec.column, prefix=spec.prefix
                )
            else:
                raise DescriptorError(
                    name,
                    f"reference field '{dc_field.name}' must be annotated with a Model "
                    f"subclass or RefValue, got {declared!r}",
                )
            continue

        if _is_reference_type(declared):
            raise DescriptorError(
                name, f"field '{dc_field.name}' holds a reference; declare it with reference()"
            )
        column_name = spec.name if isinstance(spec, ColumnSpec) else None
        builder.field(dc_field.name, column_name, value_type=declared)

    return builder.build()
