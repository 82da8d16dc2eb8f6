"""Application service: Split Order use case.

Loads the original order, lets the splitting service partition it and
persists all three aggregates it touched.  Nothing is saved unless the
whole split succeeded.
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


class SplitOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        split_repo: OrderSplitRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._split_repo = split_repo
        self._publisher = publisher

    def handle(
        self,
        order_id: str,
        quantities: dict[str, int],
        split_reason: str,
        new_address_id: str | None = None,
    ) -> OrderSplitDTO:
        original = self._order_repo.get_by_id(order_id)
        if original is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        result = OrderSplittingService().split(
            original, quantities, split_reason, new_address_id
        )

        self._order_repo.save(original)
        self._order_repo.save(result.split_order)
        self._split_repo.save(result.order_split)
        self._publisher.publish(original.pop_events())
        self._publisher.publish(result.split_order.pop_events())
        self._publisher.publish(result.order_split.pop_events())

        logger.info(
            "Split order %s into %s (%s)",
            original.order_number,
            result.split_order.order_number,
            split_reason,
        )
        return order_split_to_dto(result.order_split)
