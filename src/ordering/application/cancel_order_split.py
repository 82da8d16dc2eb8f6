"""Application service: Cancel Order Split use case.

Merges the split order back into its original order.
"""

from __future__ import annotations

import logging

from ordering.application.dto import OrderSplitDTO, order_split_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_repository import OrderRepository
from ordering.domain.repository.order_split_repository import OrderSplitRepository
from ordering.domain.service.order_splitting_service import OrderSplittingService

logger = logging.getLogger(__name__)


class CancelOrderSplitHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        split_repo: OrderSplitRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._split_repo = split_repo
        self._publisher = publisher

    def handle(self, split_id: str) -> OrderSplitDTO:
        order_split = self._split_repo.get_by_id(split_id)
        if order_split is None:
            raise EntityNotFoundError(f"Order split {split_id} not found")

        original = self._order_repo.get_by_id(order_split.original_order_id)
        if original is None:
            raise EntityNotFoundError(f"Order {order_split.original_order_id} not found")
        split_order = self._order_repo.get_by_id(order_split.split_order_id)
        if split_order is None:
            raise EntityNotFoundError(f"Order {order_split.split_order_id} not found")

        OrderSplittingService().cancel(order_split, original, split_order)

        self._order_repo.save(original)
        self._order_repo.save(split_order)
        self._split_repo.save(order_split)
        for aggregate in (original, split_order, order_split):
            self._publisher.publish(aggregate.pop_events())

        logger.info(
            "Cancelled split %s; merged %s back into %s",
            order_split.id,
            split_order.order_number,
            original.order_number,
        )
        return order_split_to_dto(order_split)
