"""RowPersist - annotation-driven row mapping and SQL clause synthesis."""

from __future__ import annotations

from row_persist.core.connection import ConnectionConfig, connect
from row_persist.core.enums import DatabaseBackend, Direction, FieldKind
from row_persist.core.exceptions import (
    AdapterError,
    ColumnMismatchError,
    DescriptorError,
    EmptyClauseError,
    MappingError,
    PlaceholderMismatchError,
    QueryError,
    QueryStateError,
    RowPersistError,
    RowSetError,
    SchemaMismatchError,
    UnpersistedEntityError,
    ValueConversionError,
)
from row_persist.core.query import SqlQuery
from row_persist.core.registry import DescriptorRegistry
from row_persist.core.rowset import ResultRowSet
from row_persist.mapping import (
    EntityRowMapper,
    FieldBinding,
    Key,
    MappingDescriptor,
    Model,
    RefValue,
    RowMapper,
    column,
    mapping,
    reference,
    table,
    transient,
    validate_mappings,
)
from row_persist.repository import Repository

__all__ = [
    # Connection
    "ConnectionConfig",
    "connect",
    # Model
    "Key",
    "RefValue",
    "Model",
    # Annotations
    "table",
    "column",
    "reference",
    "transient",
    "mapping",
    # Metadata
    "DescriptorRegistry",
    "MappingDescriptor",
    "FieldBinding",
    # Mapping
    "RowMapper",
    "EntityRowMapper",
    "ResultRowSet",
    "validate_mappings",
    # Query
    "SqlQuery",
    # Repository
    "Repository",
    # Enums
    "DatabaseBackend",
    "Direction",
    "FieldKind",
    # Exceptions
    "RowPersistError",
    "MappingError",
    "DescriptorError",
    "ColumnMismatchError",
    "ValueConversionError",
    "UnpersistedEntityError",
    "EmptyClauseError",
    "SchemaMismatchError",
    "QueryError",
    "QueryStateError",
    "PlaceholderMismatchError",
    "RowSetError",
    "AdapterError",
]
