"""Application service: advance an order split to PROCESSING or COMPLETED."""

from __future__ import annotations

import logging

from ordering.application.dto import OrderSplitDTO, order_split_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_split_repository import OrderSplitRepository

logger = logging.getLogger(__name__)


class CompleteOrderSplitHandler:

    def __init__(self, split_repo: OrderSplitRepository, publisher: EventPublisher) -> None:
        self._split_repo = split_repo
        self._publisher = publisher

    def handle(self, split_id: str, processing_only: bool = False) -> OrderSplitDTO:
        order_split = self._split_repo.get_by_id(split_id)
        if order_split is None:
            raise EntityNotFoundError(f"Order split {split_id} not found")

        if processing_only:
            order_split.mark_as_processing()
        else:
            order_split.complete()

        self._split_repo.save(order_split)
        self._publisher.publish(order_split.pop_events())

        logger.info("Order split %s is now %s", order_split.id, order_split.status.value)
        return order_split_to_dto(order_split)
