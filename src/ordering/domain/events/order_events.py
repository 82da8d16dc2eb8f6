"""Events raised by the Order aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ordering.domain.events.base import DomainEvent
from ordering.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    order_id: str
    user_id: str
    total_amount: Money


@dataclass(frozen=True)
class OrderItemAdded(DomainEvent):
    order_id: str
    user_id: str
    item_id: str
    product_id: str
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class OrderItemRemoved(DomainEvent):
    order_id: str
    user_id: str
    item_id: str
    product_id: str


@dataclass(frozen=True)
class OrderItemUpdated(DomainEvent):
    order_id: str
    user_id: str
    item_id: str
    product_id: str
    old_quantity: int
    new_quantity: int
    old_total_price: Money
    new_total_price: Money


@dataclass(frozen=True)
class CouponApplied(DomainEvent):
    order_id: str
    user_id: str
    coupon_id: str
    discount_amount: Money


@dataclass(frozen=True)
class CouponRemoved(DomainEvent):
    order_id: str
    user_id: str
    coupon_id: str | None


@dataclass(frozen=True)
class GiftCardDiscountApplied(DomainEvent):
    order_id: str
    user_id: str
    discount_amount: Money


@dataclass(frozen=True)
class OrderTotalsRecalculated(DomainEvent):
    order_id: str
    user_id: str
    sub_total: Money
    shipping_cost: Money
    tax: Money
    coupon_discount: Money | None
    gift_card_discount: Money | None
    total_amount: Money


@dataclass(frozen=True)
class OrderConfirmed(DomainEvent):
    order_id: str
    user_id: str


@dataclass(frozen=True)
class OrderShipped(DomainEvent):
    order_id: str
    user_id: str
    shipped_date: datetime


@dataclass(frozen=True)
class OrderDelivered(DomainEvent):
    order_id: str
    user_id: str
    delivered_date: datetime


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    order_id: str
    user_id: str
    reason: str | None


@dataclass(frozen=True)
class OrderRefunded(DomainEvent):
    order_id: str
    user_id: str
    total_amount: Money


@dataclass(frozen=True)
class OrderPutOnHold(DomainEvent):
    order_id: str
    user_id: str
    reason: str | None


@dataclass(frozen=True)
class PaymentStatusChanged(DomainEvent):
    order_id: str
    user_id: str
    old_status: str
    new_status: str


@dataclass(frozen=True)
class PaymentMethodChanged(DomainEvent):
    order_id: str
    user_id: str
    old_method: str
    new_method: str
