"""Row-to-entity mapper.

Materializes entities from the current row of a RowSet using their
MappingDescriptor. Columns are looked up by name, never by position.
Embedded references are mapped from the same row: the foreign-key column
is the presence probe, and the referenced entity's own columns are read
under the prefixes of every enclosing binding, concatenated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from row_persist.core.enums import FieldKind
from row_persist.core.exceptions import ColumnMismatchError, MappingError
from row_persist.mapping.convert import convert_value
from row_persist.mapping.descriptor import FieldBinding, MappingDescriptor
from row_persist.mapping.keys import Key, RefValue

if TYPE_CHECKING:
    from row_persist.adapters.protocol import RowSet
    from row_persist.core.registry import DescriptorRegistry

T = TypeVar("T")

logger = logging.getLogger(__name__)

_ABSENT = object()


class RowMapper:
    """Descriptor-driven row mapper.

    Args:
        registry: Resolves descriptors for embedded reference types.
        strict: Raise ColumnMismatchError for missing scalar columns of the
            root entity instead of leaving the attribute at its default.
            Columns of embedded entities stay optional.
        max_depth: How many levels of embedded references to materialize.
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        *,
        strict: bool = False,
        max_depth: int = 1,
    ) -> None:
        self._registry = registry
        self._strict = strict
        self._max_depth = max_depth

    def map_row(
        self,
        descriptor: MappingDescriptor,
        row: RowSet,
        row_index: int | None = None,
    ) -> Any | None:
        """Map the current row to a new instance of ``descriptor.entity_type``.

        Returns None only when *row* has no current row.

        Raises:
            MappingError: If the row cannot be mapped (missing key column,
                missing RefValue columns, lossy conversion, constructor failure).
        """
        if row.current_row_index == 0:
            return None
        index = row.current_row_index if row_index is None else row_index
        try:
            return self._map(descriptor, row, prefix="", depth=0, key_column=None)
        except MappingError as exc:
            logger.error(
                "Failed to map row %d to %s: %s", index, descriptor.entity_name, exc
            )
            raise

    def map_all(self, descriptor: MappingDescriptor, row: RowSet) -> list[Any]:
        """Advance through every remaining row, mapping each."""
        results: list[Any] = []
        while row.next():
            results.append(self.map_row(descriptor, row))
        return results

    def _map(
        self,
        descriptor: MappingDescriptor,
        row: RowSet,
        prefix: str,
        depth: int,
        key_column: str | None,
    ) -> Any:
        values: dict[str, Any] = {}

        # Key: root reads its own primary key column, embedded entities the
        # foreign-key column of their parent.
        key_column = key_column or prefix + descriptor.primary_key
        if not row.has_column(key_column):
            raise ColumnMismatchError(descriptor.entity_name, [key_column])
        key_binding = descriptor.primary_key_binding
        key_value = convert_value(row.get_column(key_column), key_binding.value_type, key_column)
        if key_binding.attribute is not None:
            values[key_binding.attribute] = key_value

        for binding in descriptor.fields:
            if binding.kind is FieldKind.SCALAR:
                value = self._read_scalar(descriptor, binding, row, prefix, depth)
            elif binding.is_ref_value:
                value = self._read_ref_value(descriptor, binding, row, prefix, depth)
            elif binding.kind is FieldKind.REFERENCE:
                if depth >= self._max_depth:
                    continue
                value = self._read_embedded(descriptor, binding, row, prefix, depth)
            else:
                continue
            if value is not _ABSENT:
                values[binding.attribute] = value  # type: ignore[index]

        instance = self._instantiate(descriptor, values)
        instance.key = (
            Key.NONE if key_value is None else Key.of(descriptor.primary_key, key_value)
        )
        return instance

    def _read_scalar(
        self,
        descriptor: MappingDescriptor,
        binding: FieldBinding,
        row: RowSet,
        prefix: str,
        depth: int,
    ) -> Any:
        column = prefix + binding.column
        if not row.has_column(column):
            if self._strict and depth == 0:
                raise ColumnMismatchError(descriptor.entity_name, [column])
            logger.debug(
                "Row has no column '%s' for %s.%s; leaving default",
                column,
                descriptor.entity_name,
                binding.attribute,
            )
            return _ABSENT
        return convert_value(row.get_column(column), binding.value_type, column)

    def _read_ref_value(
        self,
        descriptor: MappingDescriptor,
        binding: FieldBinding,
        row: RowSet,
        prefix: str,
        depth: int,
    ) -> Any:
        column = prefix + binding.column
        required = [column]
        if binding.label_column:
            required.append(prefix + binding.label_column)
        missing = [name for name in required if not row.has_column(name)]
        if missing:
            if depth == 0:
                raise ColumnMismatchError(descriptor.entity_name, missing)
            logger.debug(
                "Row has no columns %s for nested %s.%s; leaving default",
                missing,
                descriptor.entity_name,
                binding.attribute,
            )
            return _ABSENT

        foreign_key = row.get_column(column)
        if foreign_key is None:
            return None
        label = row.get_column(prefix + binding.label_column) if binding.label_column else None
        return RefValue(Key.of(binding.column, foreign_key), label)

    def _read_embedded(
        self,
        descriptor: MappingDescriptor,
        binding: FieldBinding,
        row: RowSet,
        prefix: str,
        depth: int,
    ) -> Any:
        column = prefix + binding.column
        if not row.has_column(column):
            logger.debug(
                "Row has no column '%s' for reference %s.%s; leaving default",
                column,
                descriptor.entity_name,
                binding.attribute,
            )
            return _ABSENT
        nested = self._registry.resolve(binding.referenced_type)  # type: ignore[arg-type]
        return self._map(
            nested, row, prefix=prefix + binding.prefix, depth=depth + 1, key_column=column
        )

    @staticmethod
    def _instantiate(descriptor: MappingDescriptor, values: dict[str, Any]) -> Any:
        try:
            return descriptor.entity_type(**values)
        except TypeError as e:
            raise MappingError(f"Cannot construct {descriptor.entity_name}: {e}") from e


class EntityRowMapper(Generic[T]):
    """RowMapper bound to one entity type; implements the EntityMapper protocol."""

    def __init__(
        self,
        entity_type: type[T],
        registry: DescriptorRegistry,
        *,
        strict: bool = False,
    ) -> None:
        self._descriptor = registry.resolve(entity_type)
        self._mapper = RowMapper(registry, strict=strict)

    @property
    def descriptor(self) -> MappingDescriptor:
        return self._descriptor

    def map_row(self, row: RowSet, row_index: int | None = None) -> T | None:
        return self._mapper.map_row(self._descriptor, row, row_index)  # type: ignore[no-any-return]

    def map_all(self, row: RowSet) -> list[T]:
        return self._mapper.map_all(self._descriptor, row)
