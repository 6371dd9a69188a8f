"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from row_persist.adapters.sqlite import SqliteExecutor
from row_persist.core.connection import ConnectionConfig
from row_persist.core.registry import DescriptorRegistry

SCHEMA = """
CREATE TABLE note (
    n_key INTEGER PRIMARY KEY,
    note_text TEXT
);
CREATE TABLE supplier (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL
);
CREATE TABLE purchase_order (
    id INTEGER PRIMARY KEY,
    requester TEXT,
    po_number_id INTEGER,
    primitive_id INTEGER,
    long_id INTEGER,
    supplier_id INTEGER REFERENCES supplier (id),
    n_key INTEGER REFERENCES note (n_key)
);
"""


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def registry() -> DescriptorRegistry:
    """Fresh descriptor registry per test."""
    return DescriptorRegistry()


@pytest.fixture
def sqlite_executor() -> Iterator[SqliteExecutor]:
    """In-memory SQLite executor with the purchase order schema loaded."""
    connection = sqlite3.connect(":memory:")
    connection.executescript(SCHEMA)
    executor = SqliteExecutor(connection)
    yield executor
    executor.close()
