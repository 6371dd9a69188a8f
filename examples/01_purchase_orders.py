"""
Example 01: Purchase Orders

This example demonstrates annotated entities, the Repository facade and
reference mapping against a SQLite database.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from row_persist import (
    ConnectionConfig,
    DescriptorRegistry,
    Direction,
    EntityRowMapper,
    Model,
    RefValue,
    Repository,
    SqlQuery,
    column,
    connect,
    reference,
    table,
    validate_mappings,
)


@table("supplier", primary_key="id")
@dataclass
class Supplier(Model):
    """Supplier entity"""
    name: Optional[str] = None


@table("purchase_order", primary_key="id")
@dataclass
class PurchaseOrder(Model):
    """Purchase order entity"""
    requester: Optional[str] = None
    po_number: Optional[int] = column("po_number_id")
    supplier: Optional[Supplier] = reference("supplier_id", prefix="supplier_")


@table("purchase_order", primary_key="id")
@dataclass
class OrderLine(Model):
    """Read model: requester plus the supplier name"""
    requester: Optional[str] = None
    supplier: Optional[RefValue] = reference("supplier_id", label="supplier_name")


class PurchaseOrderRepository(Repository[PurchaseOrder]):
    """Repository for purchase orders"""

    def find_by_requester(self, requester: str) -> list[PurchaseOrder]:
        """Find orders placed by one requester"""
        query = SqlQuery().where("requester = ?", requester).order_by("id", Direction.ASC)
        return self.query_entity(query, PurchaseOrder)

    def list_with_supplier(self) -> list[PurchaseOrder]:
        """Load orders with their supplier from a join"""
        query = SqlQuery.raw(
            "SELECT po.*, s.name AS supplier_name FROM purchase_order po "
            "LEFT JOIN supplier s ON s.id = po.supplier_id ORDER BY po.id"
        )
        return self.query(query, EntityRowMapper(PurchaseOrder, self.registry))

    def order_lines(self) -> list[OrderLine]:
        """Project orders to requester/supplier-name pairs"""
        query = SqlQuery.raw(
            "SELECT po.id, po.requester, po.supplier_id, s.name AS supplier_name "
            "FROM purchase_order po LEFT JOIN supplier s ON s.id = po.supplier_id"
        )
        return self.query(query, EntityRowMapper(OrderLine, self.registry))


def main():
    logging.basicConfig(level=logging.INFO)

    # Set up database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    executor = connect(config)
    executor.execute("CREATE TABLE supplier (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT)")
    executor.execute("""
        CREATE TABLE purchase_order (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            requester TEXT,
            po_number_id INTEGER,
            supplier_id INTEGER REFERENCES supplier (id)
        )
    """)

    registry = DescriptorRegistry()
    validate_mappings(executor, registry, Supplier, PurchaseOrder, OrderLine)

    suppliers = Repository(executor, registry)
    orders = PurchaseOrderRepository(executor, registry)

    print("=== Purchase Orders ===\n")

    # Save new entities
    print("1. Save supplier and orders:")
    acme = Supplier(name="Acme")
    suppliers.save(acme)
    first = PurchaseOrder(requester="Alice", po_number=1001, supplier=acme)
    second = PurchaseOrder(requester="Bob", po_number=1002)
    print(f"   Supplier key: {acme.key}")
    print(f"   Order keys: {orders.save(first)}, {orders.save(second)}\n")

    # Load by key
    print("2. Get order by key:")
    loaded = orders.get(first.key, PurchaseOrder)
    if loaded:
        print(f"   Found: {loaded.requester} #{loaded.po_number}\n")

    # Update
    print("3. Update order:")
    second.supplier = acme
    orders.save(second)
    print(f"   Updated order {second.key.value}\n")

    # Finder methods
    print("4. Orders by requester:")
    for order in orders.find_by_requester("Alice"):
        print(f"   - #{order.po_number}")
    print()

    print("5. Orders with supplier (embedded reference):")
    for order in orders.list_with_supplier():
        print(f"   - {order.requester}: {order.supplier.name}")
    print()

    print("6. Order lines (RefValue projection):")
    for line in orders.order_lines():
        label = line.supplier.value if line.supplier else "-"
        print(f"   - {line.requester}: {label}")
    print()

    # Delete
    print("7. Delete order:")
    print(f"   Deleted rows: {orders.delete(first)}\n")

    # Clean up
    executor.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
