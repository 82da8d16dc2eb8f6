"""Coupon data supplied by the marketing module.

The Order aggregate never fetches coupons; the caller loads one and
hands it over.  ``check_applicable`` holds the rules that decide whether
a coupon may be used, each failure with its own message.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from ordering.domain.exceptions import BusinessRuleError, ValidationError
from ordering.domain.model.value_objects import Money


@dataclass
class Coupon:
    id: str
    code: str
    discount_amount: Money
    start_date: datetime
    end_date: datetime
    discount_percentage: Decimal | None = None
    minimum_purchase_amount: Money | None = None
    maximum_discount_amount: Money | None = None
    usage_limit: int = 0  # 0 means unlimited
    used_count: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValidationError("Coupon end date must not precede its start date")
        if self.discount_percentage is not None and not (
            Decimal("0") <= self.discount_percentage <= Decimal("100")
        ):
            raise ValidationError("Discount percentage must be between 0 and 100")

    @property
    def usage_limit_reached(self) -> bool:
        return self.usage_limit > 0 and self.used_count >= self.usage_limit

    def check_applicable(self, purchase_amount: Money, now: datetime | None = None) -> None:
        """Raise BusinessRuleError if the coupon cannot be used right now."""
        now = now or datetime.now(timezone.utc)
        if not self.is_active:
            raise BusinessRuleError(f"Coupon '{self.code}' is not active")
        if self.usage_limit_reached:
            raise BusinessRuleError(f"Coupon '{self.code}' has reached its usage limit")
        if now < self.start_date or now > self.end_date:
            raise BusinessRuleError(f"Coupon '{self.code}' is outside its validity period")
        if (
            self.minimum_purchase_amount is not None
            and purchase_amount < self.minimum_purchase_amount
        ):
            raise BusinessRuleError(
                f"Coupon '{self.code}' requires a minimum purchase of "
                f"{self.minimum_purchase_amount}"
            )

    def is_valid(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return (
            self.is_active
            and not self.usage_limit_reached
            and self.start_date <= now <= self.end_date
        )

    def calculate_discount(self, purchase_amount: Money, now: datetime | None = None) -> Money:
        """Discount this coupon grants on *purchase_amount*.

        Percentage coupons take precedence over the fixed amount; the
        result is capped by ``maximum_discount_amount`` and never exceeds
        the purchase amount itself.
        """
        self.check_applicable(purchase_amount, now)

        if self.discount_percentage is not None:
            discount = (purchase_amount * (self.discount_percentage / 100)).rounded()
        else:
            discount = self.discount_amount

        if self.maximum_discount_amount is not None and discount > self.maximum_discount_amount:
            discount = self.maximum_discount_amount
        if discount > purchase_amount:
            discount = purchase_amount
        return discount

    def increment_usage(self, now: datetime | None = None) -> None:
        if not self.is_valid(now):
            raise BusinessRuleError(f"Coupon '{self.code}' can no longer be used")
        self.used_count += 1
