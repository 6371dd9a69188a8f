"""PostgreSQL executor using psycopg (v3+)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from row_persist.core.connection import ConnectionConfig
from row_persist.core.params import normalize_params
from row_persist.core.rowset import ResultRowSet

logger = logging.getLogger(__name__)


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlExecutor:
    """Synchronous PostgreSQL executor.

    psycopg uses the 'format' paramstyle, so `?` placeholders are rewritten
    to `%s` before execution. Generated keys are read back with
    ``RETURNING``.
    """

    paramstyle = "format"

    def __init__(self, connection: Any, *, autocommit: bool = True) -> None:
        self._connection = connection
        self._autocommit = autocommit

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> PostgresqlExecutor:
        import psycopg

        connection = psycopg.connect(_build_conninfo(config), **config.extra)
        return cls(connection, autocommit=config.autocommit)

    @property
    def connection(self) -> Any:
        return self._connection

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Execute a write statement and return the affected row count."""
        sql = normalize_params(sql, self.paramstyle)
        logger.debug("PostgreSQL execute [%s] %s", sql, list(params))
        with self._connection.cursor() as cursor:
            cursor.execute(sql, tuple(params))
            rowcount = int(cursor.rowcount)
        self._commit()
        return rowcount

    def execute_insert(
        self,
        sql: str,
        params: Sequence[Any] = (),
        key_column: str | None = None,
    ) -> Any:
        """Execute an INSERT and return the generated *key_column* value.

        Without *key_column* no key can be read back and None is returned.
        """
        if key_column:
            sql = f"{sql} RETURNING {key_column}"
        sql = normalize_params(sql, self.paramstyle)
        logger.debug("PostgreSQL insert [%s] %s", sql, list(params))
        with self._connection.cursor() as cursor:
            cursor.execute(sql, tuple(params))
            row = cursor.fetchone() if key_column else None
        self._commit()
        return None if row is None else row[0]

    def query(self, sql: str, params: Sequence[Any] = ()) -> ResultRowSet:
        """Execute a SELECT and materialize its rows."""
        sql = normalize_params(sql, self.paramstyle)
        logger.debug("PostgreSQL query [%s] %s", sql, list(params))
        with self._connection.cursor() as cursor:
            cursor.execute(sql, tuple(params))
            columns = [desc[0] for desc in cursor.description or ()]
            rows = cursor.fetchall() if cursor.description else []
        return ResultRowSet(columns, rows)

    def close(self) -> None:
        self._connection.close()

    def _commit(self) -> None:
        if self._autocommit:
            self._connection.commit()
