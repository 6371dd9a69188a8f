"""Connection configuration.

ConnectionConfig is a Pydantic model for type-safe connection config.
`connect` loads the executor for the configured driver.
"""

from __future__ import annotations

import importlib
from typing import Any

from pydantic import BaseModel

from row_persist.core.enums import DatabaseBackend
from row_persist.core.exceptions import AdapterError


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    autocommit: bool = True
    extra: dict[str, Any] = {}


# Executor module mapping: backend -> (module_path, executor_class)
_EXECUTOR_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_persist.adapters.sqlite", "SqliteExecutor"),
    DatabaseBackend.POSTGRESQL: ("row_persist.adapters.postgresql", "PostgresqlExecutor"),
}


def _load_executor_class(driver: str) -> Any:
    """Load an executor class by driver name."""
    try:
        backend = DatabaseBackend(driver.lower())
    except ValueError:
        raise AdapterError(f"Unsupported database driver: {driver}") from None

    module_path, cls_name = _EXECUTOR_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load executor for '{driver}': {e}") from e


def connect(config: ConnectionConfig) -> Any:
    """Open a connection and return the matching SqlExecutor."""
    return _load_executor_class(config.driver).from_config(config)
