"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
Products are resolved by name and handed to the Order aggregate, which
locks their current price onto each line.
"""

from __future__ import annotations

import logging

from ordering.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError, ValidationError
from ordering.domain.model.order import Order
from ordering.domain.model.value_objects import Money
from ordering.domain.repository.order_repository import OrderRepository
from ordering.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(
        self,
        user_id: str,
        address_id: str,
        item_specs: list[OrderItemSpec],
        shipping_cost: str | None = None,
        tax: str | None = None,
    ) -> OrderDTO:
        """Create a new customer order.

        Steps:
        1. Resolve each product name to a Product (fail if not found).
        2. Add the lines; the aggregate checks stock and locks prices.
        3. Apply shipping and tax, then persist and publish the events.
        """
        if not item_specs:
            raise ValidationError("An order needs at least one item")

        order = Order.create(user_id=user_id, address_id=address_id)
        for spec in item_specs:
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            order.add_item(product, spec.quantity)

        if shipping_cost is not None:
            order.set_shipping_cost(Money.of(shipping_cost, order.currency))
        if tax is not None:
            order.set_tax(Money.of(tax, order.currency))

        self._order_repo.save(order)
        self._publisher.publish(order.pop_events())

        logger.info(
            "Created order %s for user %s (%d items, total %s)",
            order.order_number,
            user_id,
            len(order.items),
            order.total_amount,
        )
        return order_to_dto(order)
