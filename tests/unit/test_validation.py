"""Unit tests for schema validation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from entities import Note, PurchaseOrder, Supplier
from row_persist.adapters.sqlite import SqliteExecutor
from row_persist.core.exceptions import MappingError, SchemaMismatchError
from row_persist.core.registry import DescriptorRegistry
from row_persist.core.rowset import ResultRowSet
from row_persist.mapping.validation import expected_columns, validate_mappings


class TestExpectedColumns:
    def test_key_then_writable_columns(self, registry: DescriptorRegistry) -> None:
        assert expected_columns(registry.resolve(Supplier)) == ["id", "name"]


class TestValidateMappings:
    def test_matching_schema(
        self, sqlite_executor: SqliteExecutor, registry: DescriptorRegistry
    ) -> None:
        validate_mappings(sqlite_executor, registry, PurchaseOrder, Note, Supplier)

    def test_missing_column_reported(self, registry: DescriptorRegistry) -> None:
        executor = MagicMock()
        executor.query.return_value = ResultRowSet(["ID"], [])

        with pytest.raises(SchemaMismatchError) as exc_info:
            validate_mappings(executor, registry, Supplier)

        assert exc_info.value.failures == [
            "- Column 'name' required by Supplier is missing in table 'supplier'"
        ]
        executor.query.assert_called_once_with("SELECT * FROM supplier WHERE 1=0")

    def test_missing_table_collected(
        self, sqlite_executor: SqliteExecutor, registry: DescriptorRegistry
    ) -> None:
        sqlite_executor.connection.execute("DROP TABLE note")

        with pytest.raises(SchemaMismatchError) as exc_info:
            validate_mappings(sqlite_executor, registry, Supplier, Note)

        assert len(exc_info.value.failures) == 1
        assert "Table 'note'" in exc_info.value.failures[0]

    def test_schema_mismatch_is_mapping_error(self, registry: DescriptorRegistry) -> None:
        executor = MagicMock()
        executor.query.side_effect = RuntimeError("no such table")
        with pytest.raises(MappingError):
            validate_mappings(executor, registry, Supplier)
