"""RowPersist exception hierarchy.

Mapping errors are configuration or usage defects and are never retried.
Driver exceptions raised by executors are not wrapped and reach the caller
unchanged.
"""

from __future__ import annotations


class RowPersistError(Exception):
    """Base exception for all RowPersist errors."""


# --- Mapping ---


class MappingError(RowPersistError):
    """Base for mapping errors."""


class DescriptorError(MappingError):
    """Raised when a type's mapping metadata is missing or inconsistent."""

    def __init__(self, entity_name: str, detail: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Invalid mapping for {entity_name}: {detail}")


class ColumnMismatchError(MappingError):
    """Raised when required columns are not present in a row."""

    def __init__(self, entity_name: str, missing_columns: list[str]) -> None:
        self.entity_name = entity_name
        self.missing_columns = missing_columns
        super().__init__(f"Cannot map to {entity_name}: missing columns {missing_columns}")


class ValueConversionError(MappingError):
    """Raised when a column value cannot be converted to its declared type without loss."""

    def __init__(self, column: str, value: object, target: object) -> None:
        self.column = column
        self.value = value
        self.target = target
        target_name = getattr(target, "__name__", repr(target))
        super().__init__(
            f"Cannot convert column '{column}' value {value!r} to {target_name}"
        )


class UnpersistedEntityError(MappingError):
    """Raised when an operation needs a key but the entity has none."""

    def __init__(self, entity_name: str, action: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Cannot {action} {entity_name}: entity has no key")


class EmptyClauseError(MappingError):
    """Raised when an entity has no columns eligible for a write clause."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"No writable columns for {entity_name}")


class SchemaMismatchError(MappingError):
    """Raised when mapped types do not match the database schema."""

    def __init__(self, failures: list[str]) -> None:
        self.failures = failures
        super().__init__("Schema validation failed:\n" + "\n".join(failures))


# --- Query ---


class QueryError(RowPersistError):
    """Base for query composition errors."""


class QueryStateError(QueryError):
    """Raised on invalid SqlQuery mutations."""


class PlaceholderMismatchError(QueryError):
    """Raised when the number of '?' placeholders differs from the bound values."""

    def __init__(self, sql: str, expected: int, found: int) -> None:
        self.sql = sql
        self.expected = expected
        self.found = found
        super().__init__(
            f"Placeholder mismatch for SQL [{sql}]: expected {expected} values but found {found}"
        )


# --- Row set ---


class RowSetError(RowPersistError):
    """Raised when a row set is read without a current row."""


# --- Adapter ---


class AdapterError(RowPersistError):
    """Raised when an executor cannot be loaded for a driver."""
