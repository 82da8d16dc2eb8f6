"""Application service: register a coupon with the marketing snapshot."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from ordering.domain.exceptions import ValidationError
from ordering.domain.model.coupon import Coupon
from ordering.domain.model.value_objects import Money
from ordering.domain.repository.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)


class AddCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(
        self,
        code: str,
        amount: str | None = None,
        percentage: str | None = None,
        minimum_purchase: str | None = None,
        maximum_discount: str | None = None,
        valid_days: int = 30,
        usage_limit: int = 0,
        now: datetime | None = None,
    ) -> Coupon:
        if not code or not code.strip():
            raise ValidationError("Coupon code is required")
        if (amount is None) == (percentage is None):
            raise ValidationError("Give either a fixed amount or a percentage")
        if valid_days <= 0:
            raise ValidationError("Coupon must be valid for at least one day")
        if usage_limit < 0:
            raise ValidationError("Usage limit cannot be negative")
        if self._coupon_repo.get_by_code(code) is not None:
            raise ValidationError(f"Coupon '{code}' already exists")

        try:
            discount_percentage = Decimal(percentage) if percentage is not None else None
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid discount percentage: {percentage!r}") from exc

        now = now or datetime.now(timezone.utc)
        coupon = Coupon(
            id=code.strip().upper(),
            code=code.strip().upper(),
            discount_amount=Money.of(amount) if amount is not None else Money.zero(),
            start_date=now,
            end_date=now + timedelta(days=valid_days),
            discount_percentage=discount_percentage,
            minimum_purchase_amount=(
                Money.of(minimum_purchase) if minimum_purchase is not None else None
            ),
            maximum_discount_amount=(
                Money.of(maximum_discount) if maximum_discount is not None else None
            ),
            usage_limit=usage_limit,
        )
        if coupon.discount_amount.is_negative:
            raise ValidationError("Coupon amount cannot be negative")

        self._coupon_repo.save(coupon)
        logger.info("Added coupon %s", coupon.code)
        return coupon
