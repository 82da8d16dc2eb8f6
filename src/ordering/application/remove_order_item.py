"""Application service: Remove Order Item use case."""

from __future__ import annotations

import logging

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class RemoveOrderItemHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, order_id: str, item_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.remove_item(item_id)
        self._order_repo.save(order)
        self._publisher.publish(order.pop_events())

        logger.info("Removed item %s from order %s", item_id, order.order_number)
        return order_to_dto(order)
