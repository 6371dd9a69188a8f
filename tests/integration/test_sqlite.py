"""Integration test for SQLite full workflow.

Covers: schema validation, repository save/get/update/delete, query
composition and reference mapping against a real SQLite in-memory database.
"""

from __future__ import annotations

import pytest

from entities import Note, PurchaseOrder, PurchaseOrderSummary, Supplier
from row_persist.adapters.sqlite import SqliteExecutor
from row_persist.core.enums import Direction
from row_persist.core.query import SqlQuery
from row_persist.core.registry import DescriptorRegistry
from row_persist.mapping.keys import Key
from row_persist.mapping.row_mapper import EntityRowMapper
from row_persist.mapping.validation import validate_mappings
from row_persist.repository.base import Repository


@pytest.fixture
def repository(sqlite_executor: SqliteExecutor, registry: DescriptorRegistry) -> Repository:
    validate_mappings(sqlite_executor, registry, PurchaseOrder, Note, Supplier)
    return Repository(sqlite_executor, registry)


def _seed(repository: Repository) -> tuple[Supplier, Note, PurchaseOrder]:
    supplier = Supplier(name="Acme")
    repository.save(supplier)
    note = Note(text="urgent")
    repository.save(note)
    order = PurchaseOrder(
        requester="Kotlin Request",
        po_number_id=55,
        primitive_example_id=77,
        long_id=99,
        supplier_id=supplier.key.value,
        note=note,
    )
    repository.save(order)
    return supplier, note, order


@pytest.mark.integration
class TestSqliteRepository:
    def test_save_assigns_key(self, repository: Repository) -> None:
        supplier = Supplier(name="Acme")
        key = repository.save(supplier)
        assert key == Key.of("id", 1)
        assert supplier.key == key

    def test_get_round_trip(self, repository: Repository) -> None:
        _, note, order = _seed(repository)

        loaded = repository.get(order.key, PurchaseOrder)

        assert loaded is not None
        assert loaded.key == order.key
        assert loaded.requester == "Kotlin Request"
        assert loaded.primitive_example_id == 77
        assert loaded.note.key == note.key
        # note_text is not part of the purchase_order select list
        assert loaded.note.text is None

    def test_strict_get_with_embedded_reference(
        self, repository: Repository, sqlite_executor: SqliteExecutor
    ) -> None:
        _, note, order = _seed(repository)
        strict = Repository(sqlite_executor, repository.registry, strict=True)

        loaded = strict.get(order.key, PurchaseOrder)

        assert loaded.requester == "Kotlin Request"
        assert loaded.note.key == note.key

    def test_update(self, repository: Repository) -> None:
        _, _, order = _seed(repository)
        order.requester = "Updated"
        order.note = None

        assert repository.save(order) == order.key

        loaded = repository.get(order.key, PurchaseOrder)
        assert loaded.requester == "Updated"
        assert loaded.note.key is Key.NONE

    def test_delete(self, repository: Repository) -> None:
        _, _, order = _seed(repository)
        assert repository.delete(order) == 1
        assert repository.get(order.key, PurchaseOrder) is None

    def test_get_missing(self, repository: Repository) -> None:
        assert repository.get(Key.of("id", 404), Supplier) is None

    def test_query_entity(self, repository: Repository) -> None:
        for name in ("Globex", "Acme", "Initech"):
            repository.save(Supplier(name=name))

        query = SqlQuery().where("name <> ?", "Initech").order_by("name", Direction.ASC)
        suppliers = repository.query_entity(query, Supplier)

        assert [s.name for s in suppliers] == ["Acme", "Globex"]
        assert all(not s.is_new for s in suppliers)


@pytest.mark.integration
class TestSqliteJoinedMapping:
    def test_embedded_reference_from_join(
        self, repository: Repository, registry: DescriptorRegistry
    ) -> None:
        _, note, order = _seed(repository)
        query = SqlQuery.raw(
            "SELECT po.*, n.note_text FROM purchase_order po "
            "LEFT JOIN note n ON n.n_key = po.n_key WHERE po.id = ?",
            order.key.value,
        )

        (loaded,) = repository.query(query, EntityRowMapper(PurchaseOrder, registry))

        assert loaded.note.key == note.key
        assert loaded.note.text == "urgent"

    def test_ref_value_label_from_join(
        self, repository: Repository, registry: DescriptorRegistry
    ) -> None:
        _, _, order = _seed(repository)
        repository.save(PurchaseOrder(requester="No supplier"))
        query = (
            SqlQuery()
            .select("SELECT po.id, po.requester, po.supplier_id, s.name AS supplier_name")
            .from_("purchase_order po")
            .join("LEFT JOIN supplier s ON s.id = po.supplier_id")
            .order_by("po.id")
        )

        first, second = repository.query(query, EntityRowMapper(PurchaseOrderSummary, registry))

        assert first.key == order.key
        assert first.supplier.value == "Acme"
        assert first.supplier.ref == Key.of("supplier_id", 1)
        assert second.supplier is None
