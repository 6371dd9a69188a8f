"""SQLite executor using stdlib sqlite3."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

from row_persist.core.connection import ConnectionConfig
from row_persist.core.rowset import ResultRowSet

logger = logging.getLogger(__name__)


class SqliteExecutor:
    """Synchronous SQLite executor.

    sqlite3 uses the qmark paramstyle natively, so statements run as
    written. With ``autocommit`` each write is committed immediately;
    otherwise the caller owns commit/rollback on ``connection``.
    """

    paramstyle = "qmark"

    def __init__(self, connection: sqlite3.Connection, *, autocommit: bool = True) -> None:
        self._connection = connection
        self._autocommit = autocommit

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> SqliteExecutor:
        """Open ``config.database`` (a path or ``:memory:``)."""
        connection = sqlite3.connect(config.database, **config.extra)
        return cls(connection, autocommit=config.autocommit)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Execute a write statement and return the affected row count."""
        logger.debug("SQLite execute [%s] %s", sql, list(params))
        cursor = self._connection.execute(sql, tuple(params))
        self._commit()
        return int(cursor.rowcount)

    def execute_insert(
        self,
        sql: str,
        params: Sequence[Any] = (),
        key_column: str | None = None,
    ) -> Any:
        """Execute an INSERT and return ``lastrowid``.

        *key_column* is accepted for protocol compatibility; SQLite always
        reports the rowid.
        """
        logger.debug("SQLite insert [%s] %s", sql, list(params))
        cursor = self._connection.execute(sql, tuple(params))
        self._commit()
        return cursor.lastrowid

    def query(self, sql: str, params: Sequence[Any] = ()) -> ResultRowSet:
        """Execute a SELECT and materialize its rows."""
        logger.debug("SQLite query [%s] %s", sql, list(params))
        cursor = self._connection.execute(sql, tuple(params))
        columns = [desc[0] for desc in cursor.description or ()]
        return ResultRowSet(columns, cursor.fetchall())

    def close(self) -> None:
        self._connection.close()

    def _commit(self) -> None:
        if self._autocommit:
            self._connection.commit()
