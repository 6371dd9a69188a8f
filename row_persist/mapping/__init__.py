"""Mapping layer - entity metadata, row materialization and clause synthesis."""

from __future__ import annotations

from row_persist.mapping.annotations import column, reference, table, transient
from row_persist.mapping.builder import MappingBuilder, mapping
from row_persist.mapping.clause import (
    DeleteClause,
    InsertClause,
    UpdateClause,
    delete_clause,
    insert_clause,
    select_clause,
    update_clause,
)
from row_persist.mapping.descriptor import FieldBinding, MappingDescriptor
from row_persist.mapping.keys import Key, Model, RefValue
from row_persist.mapping.row_mapper import EntityRowMapper, RowMapper
from row_persist.mapping.validation import validate_mappings

__all__ = [
    "Key",
    "RefValue",
    "Model",
    "table",
    "column",
    "reference",
    "transient",
    "mapping",
    "MappingBuilder",
    "MappingDescriptor",
    "FieldBinding",
    "RowMapper",
    "EntityRowMapper",
    "InsertClause",
    "UpdateClause",
    "DeleteClause",
    "insert_clause",
    "update_clause",
    "delete_clause",
    "select_clause",
    "validate_mappings",
]
