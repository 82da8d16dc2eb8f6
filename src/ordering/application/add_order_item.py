"""Application service: Add Order Item use case."""

from __future__ import annotations

import logging

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_repository import OrderRepository
from ordering.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddOrderItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, order_id: str, product_name: str, quantity: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        item = order.add_item(product, quantity)
        self._order_repo.save(order)
        self._publisher.publish(order.pop_events())

        logger.info(
            "Added %d x %s to order %s", quantity, item.product_name, order.order_number
        )
        return order_to_dto(order)
