"""Schema validation for mapped types.

Checks every mapped column against the live table so drift between entity
declarations and the database shows up at startup instead of at first use.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from row_persist.core.exceptions import SchemaMismatchError

if TYPE_CHECKING:
    from row_persist.adapters.protocol import SqlExecutor
    from row_persist.core.registry import DescriptorRegistry
    from row_persist.mapping.descriptor import MappingDescriptor

logger = logging.getLogger(__name__)


def expected_columns(descriptor: MappingDescriptor) -> list[str]:
    """Columns the table must have: the primary key and every writable column."""
    return [descriptor.primary_key] + [b.column for b in descriptor.writable_bindings()]


def validate_mappings(
    executor: SqlExecutor,
    registry: DescriptorRegistry,
    *entity_types: type,
) -> None:
    """Validate *entity_types* against the tables visible through *executor*.

    Raises:
        SchemaMismatchError: Listing every missing table or column.
        DescriptorError: If a type cannot be resolved at all.
    """
    failures: list[str] = []
    for entity_type in entity_types:
        descriptor = registry.resolve(entity_type)
        try:
            rows = executor.query(f"SELECT * FROM {descriptor.table} WHERE 1=0")
        except Exception as exc:  # driver-specific "no such table" errors
            failures.append(
                f"- Table '{descriptor.table}' for entity {descriptor.entity_name} "
                f"is not accessible: {exc}"
            )
            continue

        for column in expected_columns(descriptor):
            if not rows.has_column(column):
                failures.append(
                    f"- Column '{column}' required by {descriptor.entity_name} "
                    f"is missing in table '{descriptor.table}'"
                )

    if failures:
        logger.error("Schema validation failed with %d problem(s)", len(failures))
        raise SchemaMismatchError(failures)
