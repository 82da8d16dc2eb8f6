"""Application service: move an order through its lifecycle.

One handler covers the fulfilment actions (confirm, ship, deliver,
cancel, refund, hold); the Order aggregate decides which are allowed.
"""

from __future__ import annotations

import logging
from enum import Enum

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.model.order import Order
from ordering.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderAction(Enum):
    CONFIRM = "confirm"
    SHIP = "ship"
    DELIVER = "deliver"
    CANCEL = "cancel"
    REFUND = "refund"
    HOLD = "hold"


class ChangeOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(
        self,
        order_id: str,
        action: OrderAction,
        reason: str | None = None,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        old_status = order.status
        self._apply(order, action, reason)

        self._order_repo.save(order)
        self._publisher.publish(order.pop_events())

        logger.info(
            "Order %s: %s -> %s",
            order.order_number,
            old_status.value,
            order.status.value,
        )
        return order_to_dto(order)

    @staticmethod
    def _apply(order: Order, action: OrderAction, reason: str | None) -> None:
        if action is OrderAction.CONFIRM:
            order.confirm()
        elif action is OrderAction.SHIP:
            order.ship()
        elif action is OrderAction.DELIVER:
            order.deliver()
        elif action is OrderAction.CANCEL:
            order.cancel(reason)
        elif action is OrderAction.REFUND:
            order.refund()
        elif action is OrderAction.HOLD:
            order.put_on_hold(reason)
