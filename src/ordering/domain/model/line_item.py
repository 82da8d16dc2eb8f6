"""Line items owned by Order and PurchaseOrder.

A line captures the unit price locked at the time it was added.  Its
total is always derived, so ``total_price == unit_price * quantity``
holds after every mutation.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from ordering.domain import guard
from ordering.domain.model.value_objects import Money


@dataclass
class LineItem:
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity

    def total_for(self, quantity: int) -> Money:
        """Line total if the line held *quantity* units."""
        return self.unit_price * quantity

    def update_quantity(self, new_quantity: int) -> None:
        guard.against_non_positive(new_quantity, "quantity")
        self.quantity = new_quantity

    def update_unit_price(self, new_price: Money) -> None:
        guard.against_negative_money(new_price, "unit_price")
        self.unit_price = new_price

    @staticmethod
    def _validate(product_id: str, quantity: int, unit_price: Money) -> None:
        guard.against_empty(product_id, "product_id")
        guard.against_non_positive(quantity, "quantity")
        guard.against_negative_money(unit_price, "unit_price")


@dataclass
class OrderItem(LineItem):
    order_id: str

    @staticmethod
    def create(
        order_id: str,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
    ) -> OrderItem:
        LineItem._validate(product_id, quantity, unit_price)
        return OrderItem(
            id=str(uuid.uuid4()),
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            order_id=order_id,
        )


@dataclass
class PurchaseOrderItem(LineItem):
    purchase_order_id: str
    notes: str | None = None

    @staticmethod
    def create(
        purchase_order_id: str,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
        notes: str | None = None,
    ) -> PurchaseOrderItem:
        LineItem._validate(product_id, quantity, unit_price)
        return PurchaseOrderItem(
            id=str(uuid.uuid4()),
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            purchase_order_id=purchase_order_id,
            notes=notes,
        )
