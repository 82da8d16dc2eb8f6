"""Application service: Apply Coupon use case.

Coordinates two aggregates: the coupon computes its own discount and
counts the usage, the order validates and absorbs the discount.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.coupon_repository import CouponRepository
from ordering.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ApplyCouponHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        coupon_repo: CouponRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._coupon_repo = coupon_repo
        self._publisher = publisher

    def handle(
        self,
        order_id: str,
        coupon_code: str,
        now: datetime | None = None,
    ) -> OrderDTO:
        now = now or datetime.now(timezone.utc)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        coupon = self._coupon_repo.get_by_code(coupon_code)
        if coupon is None:
            raise EntityNotFoundError(f"Coupon not found: '{coupon_code}'")

        already_applied = order.coupon_id == coupon.id
        discount = coupon.calculate_discount(order.sub_total, now)
        order.apply_coupon(coupon, discount, now)
        if not already_applied:
            coupon.increment_usage(now)

        self._order_repo.save(order)
        self._coupon_repo.save(coupon)
        self._publisher.publish(order.pop_events())

        logger.info(
            "Applied coupon %s to order %s (discount %s)",
            coupon.code,
            order.order_number,
            discount,
        )
        return order_to_dto(order)
