"""Repository façade.

Thin persistence wrapper over an executor, the descriptor registry, the
clause builder and the row mapper, for DDD-oriented usage.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from row_persist.core.params import assert_placeholder_count
from row_persist.core.registry import DescriptorRegistry
from row_persist.mapping.clause import (
    delete_clause,
    insert_clause,
    select_clause,
    update_clause,
)
from row_persist.mapping.keys import Key
from row_persist.mapping.row_mapper import RowMapper

if TYPE_CHECKING:
    from row_persist.adapters.protocol import RowSet, SqlExecutor
    from row_persist.core.query import SqlQuery
    from row_persist.mapping.protocol import EntityMapper

E = TypeVar("E")

logger = logging.getLogger(__name__)


def _describe_entity(entity: Any) -> str:
    key = getattr(entity, "key", None)
    if key is None or not key.is_present:
        return f"{type(entity).__name__}(new)"
    return f"{type(entity).__name__}({key.name}={key.value!r})"


class Repository(Generic[E]):
    """Persistence façade for Model entities.

    Subclasses typically add finder methods built on ``query_entity`` and
    ``query``. Statements use `?` placeholders; executors translate them to
    their driver's paramstyle.

    Args:
        executor: Runs SQL (see ``SqlExecutor``).
        registry: Descriptor cache; a private one is created when omitted.
        strict: Passed to the row mapper; missing root scalar columns raise.
    """

    def __init__(
        self,
        executor: SqlExecutor,
        registry: DescriptorRegistry | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self.executor = executor
        self.registry = registry if registry is not None else DescriptorRegistry()
        self.mapper = RowMapper(self.registry, strict=strict)

    # --- writes ---

    def save(self, entity: E) -> Key:
        """Insert a new entity or update a persisted one.

        On insert the generated key is assigned to ``entity.key``; a driver
        that reports no generated key leaves it at ``Key.NONE``.

        Returns:
            The entity's key after the write.
        """
        descriptor = self.registry.resolve(type(entity))
        if entity.is_new:  # type: ignore[attr-defined]
            clause = insert_clause(descriptor, entity)
            sql = f"INSERT INTO {descriptor.table} {clause.clause}"
            generated = self._run(
                "insert",
                entity,
                sql,
                clause.values,
                lambda: self.executor.execute_insert(
                    sql, clause.values, key_column=descriptor.primary_key
                ),
            )
            if generated is None:
                logger.warning(
                    "Insert into %s reported no generated key for %s",
                    descriptor.table,
                    descriptor.entity_name,
                )
                return entity.key  # type: ignore[attr-defined,no-any-return]
            key = Key.of(descriptor.primary_key, generated)
            entity.key = key  # type: ignore[attr-defined]
            return key

        update = update_clause(descriptor, entity)
        sql = f"UPDATE {descriptor.table} {update.clause}"
        self._run(
            "update", entity, sql, update.values, lambda: self.executor.execute(sql, update.values)
        )
        return entity.key  # type: ignore[attr-defined,no-any-return]

    def delete(self, entity: E) -> int:
        """Delete a persisted entity by its key; returns the affected row count."""
        descriptor = self.registry.resolve(type(entity))
        clause = delete_clause(descriptor, entity)
        sql = f"DELETE FROM {descriptor.table} {clause.where_sql}"
        return int(
            self._run(
                "delete",
                entity,
                sql,
                clause.values,
                lambda: self.executor.execute(sql, clause.values),
            )
        )

    # --- reads ---

    def get(self, key: Key, entity_type: type[E]) -> E | None:
        """Load one entity by key, or None when no row matches.

        Only the entity's own table is read, so ``RefValue`` labels from
        joined tables need ``query`` with an explicit join.
        """
        if not key.is_present:
            return None
        descriptor = self.registry.resolve(entity_type)
        sql = (
            f"SELECT {select_clause(descriptor)} FROM {descriptor.table} "
            f"WHERE {key.name}=?"
        )
        rows = self._query(descriptor.entity_name, sql, (key.value,))
        if not rows.next():
            return None
        entity = self.mapper.map_row(descriptor, rows)
        entity.key = key
        return entity  # type: ignore[no-any-return]

    def query_entity(self, query: SqlQuery, entity_type: type[E]) -> list[E]:
        """Select the entity's columns from its table, filtered by *query*.

        *query* supplies everything after the table name (typically a WHERE
        and ORDER BY) along with its values.
        """
        descriptor = self.registry.resolve(entity_type)
        sql = f"SELECT {select_clause(descriptor)} FROM {descriptor.table} {query.sql}".rstrip()
        rows = self._query(descriptor.entity_name, sql, query.values)
        return self.mapper.map_all(descriptor, rows)

    def query(self, query: SqlQuery, mapper: EntityMapper[Any]) -> list[Any]:
        """Run caller-written SQL and map every row with *mapper*."""
        rows = self._query("query", query.sql, query.values)
        results: list[Any] = []
        while rows.next():
            results.append(mapper.map_row(rows, rows.current_row_index))
        return results

    # --- execution helpers ---

    def _query(self, subject: str, sql: str, values: Sequence[Any]) -> RowSet:
        assert_placeholder_count(sql, values)
        logger.debug("Query for %s [%s] %s", subject, sql, list(values))
        try:
            return self.executor.query(sql, values)
        except Exception:
            logger.error("Query for %s failed [%s] %s", subject, sql, list(values))
            raise

    def _run(
        self,
        action: str,
        entity: Any,
        sql: str,
        values: Sequence[Any],
        call: Any,
    ) -> Any:
        assert_placeholder_count(sql, values)
        logger.debug("%s %s [%s] %s", action.capitalize(), _describe_entity(entity), sql, list(values))
        try:
            return call()
        except Exception:
            logger.error(
                "Failed to %s %s [%s] %s", action, _describe_entity(entity), sql, list(values)
            )
            raise
