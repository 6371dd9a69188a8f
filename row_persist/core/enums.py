"""Enumerations shared across RowPersist."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class FieldKind(Enum):
    """How a field binding participates in mapping."""

    SCALAR = "scalar"
    PRIMARY_KEY = "primary_key"
    REFERENCE = "reference"


class Direction(Enum):
    """Sort direction for ORDER BY clauses."""

    ASC = "asc"
    DESC = "desc"
