"""Application service: Change the quantity of an order line."""

from __future__ import annotations

import logging

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderItemHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, order_id: str, item_id: str, quantity: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.update_item_quantity(item_id, quantity)
        self._order_repo.save(order)
        self._publisher.publish(order.pop_events())

        logger.info(
            "Set quantity of item %s on order %s to %d",
            item_id,
            order.order_number,
            quantity,
        )
        return order_to_dto(order)
