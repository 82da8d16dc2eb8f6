"""Application service: Create Purchase Order use case (B2B).

Unlike customer orders, each line carries a negotiated unit price and
no stock is checked.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ordering.application.dto import (
    PurchaseOrderDTO,
    PurchaseOrderLineSpec,
    purchase_order_to_dto,
)
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError, ValidationError
from ordering.domain.model.purchase_order import PurchaseOrder
from ordering.domain.model.value_objects import Money
from ordering.domain.repository.product_repository import ProductRepository
from ordering.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)

logger = logging.getLogger(__name__)


class CreatePurchaseOrderHandler:

    def __init__(
        self,
        purchase_order_repo: PurchaseOrderRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
    ) -> None:
        self._purchase_order_repo = purchase_order_repo
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(
        self,
        organization_id: str,
        lines: list[PurchaseOrderLineSpec],
        b2b_user_id: str | None = None,
        po_number: str | None = None,
        tax: str | None = None,
        notes: str | None = None,
        expected_delivery_date: datetime | None = None,
    ) -> PurchaseOrderDTO:
        if not lines:
            raise ValidationError("A purchase order needs at least one line")

        purchase_order = PurchaseOrder.create(
            organization_id=organization_id,
            po_number=po_number,
            b2b_user_id=b2b_user_id,
            expected_delivery_date=expected_delivery_date,
        )
        for line in lines:
            product = self._product_repo.get_by_name(line.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{line.product_name}'")
            purchase_order.add_item(
                product,
                line.quantity,
                Money.of(line.unit_price, purchase_order.currency),
                line.notes,
            )

        if tax is not None:
            purchase_order.set_tax(Money.of(tax, purchase_order.currency))
        if notes is not None:
            purchase_order.update_notes(notes)

        self._purchase_order_repo.save(purchase_order)
        self._publisher.publish(purchase_order.pop_events())

        logger.info(
            "Created purchase order %s for organization %s (total %s)",
            purchase_order.po_number,
            organization_id,
            purchase_order.total_amount,
        )
        return purchase_order_to_dto(purchase_order)
