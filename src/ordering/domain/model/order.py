"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.

Every public mutator works in two phases: it first stages the new values,
recomputes the totals and validates the invariants without touching the
aggregate, then commits.  A fault raised while staging leaves the order
exactly as it was before the call.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ordering.domain import guard
from ordering.domain.events.order_events import (
    CouponApplied,
    CouponRemoved,
    GiftCardDiscountApplied,
    OrderCancelled,
    OrderConfirmed,
    OrderCreated,
    OrderDelivered,
    OrderItemAdded,
    OrderItemRemoved,
    OrderItemUpdated,
    OrderPutOnHold,
    OrderRefunded,
    OrderShipped,
    OrderTotalsRecalculated,
    PaymentMethodChanged,
    PaymentStatusChanged,
)
from ordering.domain.exceptions import (
    BusinessRuleError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidOperationError,
    InvalidStateTransitionError,
    ValidationError,
)
from ordering.domain.model.aggregate import AggregateRoot
from ordering.domain.model.coupon import Coupon
from ordering.domain.model.line_item import OrderItem
from ordering.domain.model.product import Product
from ordering.domain.model.value_objects import DEFAULT_CURRENCY, Money


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    ON_HOLD = "ON_HOLD"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.CANCELLED, OrderStatus.REFUNDED)


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.ON_HOLD}
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.ON_HOLD: frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}


# ---------------------------------------------------------------------------
# Totals engine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderTotals:
    sub_total: Money
    coupon_discount: Money | None
    gift_card_discount: Money | None
    shipping_cost: Money
    tax: Money
    total_amount: Money


def calculate_totals(
    line_totals: Iterable[Money],
    currency: str,
    *,
    coupon_discount: Money | None,
    gift_card_discount: Money | None,
    shipping_cost: Money,
    tax: Money,
) -> OrderTotals:
    """The one place the order total formula lives.

    ``total = sub_total - coupon - gift card + shipping + tax``; raises
    BusinessRuleError when the result would be negative.
    """
    sub_total = Money.zero(currency)
    for line_total in line_totals:
        sub_total = sub_total + line_total

    total = sub_total
    if coupon_discount is not None:
        total = total - coupon_discount
    if gift_card_discount is not None:
        total = total - gift_card_discount
    total = total + shipping_cost + tax

    if total.is_negative:
        raise BusinessRuleError(f"Order total cannot be negative (computed {total.amount})")

    return OrderTotals(
        sub_total=sub_total,
        coupon_discount=coupon_discount,
        gift_card_discount=gift_card_discount,
        shipping_cost=shipping_cost,
        tax=tax,
        total_amount=total,
    )


def generate_order_number(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"ORD-{now:%Y%m%d}-{random.randint(100000, 999999)}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order(AggregateRoot):
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it records the
    creation event.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    user_id: str
    address_id: str
    order_number: str
    currency: str = DEFAULT_CURRENCY
    items: list[OrderItem] = field(default_factory=list)
    sub_total: Money = field(default_factory=Money.zero)
    shipping_cost: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    coupon_discount: Money | None = None
    gift_card_discount: Money | None = None
    total_amount: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = ""
    coupon_id: str | None = None
    parent_order_id: str | None = None
    shipped_date: datetime | None = None
    delivered_date: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        address_id: str,
        currency: str = DEFAULT_CURRENCY,
        parent_order_id: str | None = None,
    ) -> Order:
        """Create an empty PENDING order; items are added afterwards."""
        guard.against_empty(user_id, "user_id")
        guard.against_empty(address_id, "address_id")

        zero = Money.zero(currency)
        order = Order(
            id=str(uuid.uuid4()),
            user_id=user_id,
            address_id=address_id,
            order_number=generate_order_number(),
            currency=zero.currency,
            sub_total=zero,
            shipping_cost=zero,
            tax=zero,
            total_amount=zero,
            parent_order_id=parent_order_id,
        )
        order._record(OrderCreated(order.id, user_id, zero))
        return order

    @property
    def is_split_order(self) -> bool:
        return self.parent_order_id is not None

    # --- Line items -----------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> OrderItem:
        """Add a line priced at the product's current effective price."""
        guard.against_none(product, "product")
        guard.against_non_positive(quantity, "quantity")
        self._require_status("add items to", OrderStatus.PENDING)

        if product.stock_quantity < quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(requested {quantity}, available {product.stock_quantity})"
            )

        item = OrderItem.create(
            order_id=self.id,
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.effective_price,
        )
        return self._append_item(item)

    def remove_item(self, item_id: str) -> None:
        self._require_status("remove items from", OrderStatus.PENDING)
        item = self.find_item(item_id)

        remaining = [i for i in self.items if i.id != item.id]
        totals = self._stage(line_totals=[i.total_price for i in remaining])

        self.items = remaining
        self._commit(totals)
        self._record(OrderItemRemoved(self.id, self.user_id, item.id, item.product_id))

    def update_item_quantity(self, item_id: str, new_quantity: int) -> None:
        guard.against_non_positive(new_quantity, "quantity")
        self._require_status("change item quantities on", OrderStatus.PENDING)
        self._change_quantity(self.find_item(item_id), new_quantity)

    def find_item(self, item_id: str) -> OrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError(f"Order item '{item_id}' not found in order {self.order_number}")

    # --- Discounts, shipping and tax ------------------------------------------

    def apply_coupon(
        self,
        coupon: Coupon,
        discount_amount: Money,
        now: datetime | None = None,
    ) -> None:
        guard.against_none(coupon, "coupon")
        guard.against_negative_money(discount_amount, "discount_amount")
        self._require_status("apply a coupon to", OrderStatus.PENDING)
        coupon.check_applicable(self.sub_total, now)

        totals = self._stage(coupon_discount=discount_amount)

        self.coupon_id = coupon.id
        self._commit(totals)
        self._record(CouponApplied(self.id, self.user_id, coupon.id, discount_amount))

    def remove_coupon(self) -> None:
        """Clear the coupon discount; a no-op when none is applied."""
        self._require_status("remove a coupon from", OrderStatus.PENDING)
        if self.coupon_id is None and self.coupon_discount is None:
            return

        totals = self._stage(coupon_discount=None)

        removed_coupon_id = self.coupon_id
        self.coupon_id = None
        self._commit(totals)
        self._record(CouponRemoved(self.id, self.user_id, removed_coupon_id))

    def apply_gift_card_discount(self, discount_amount: Money) -> None:
        guard.against_negative_money(discount_amount, "discount_amount")
        self._require_status("apply a gift card to", OrderStatus.PENDING)

        total_before_gift_card = self._stage(gift_card_discount=None).total_amount
        if discount_amount > total_before_gift_card:
            raise BusinessRuleError(
                f"Gift card amount {discount_amount} exceeds order total "
                f"{total_before_gift_card}"
            )

        totals = self._stage(gift_card_discount=discount_amount)

        self._commit(totals)
        self._record(GiftCardDiscountApplied(self.id, self.user_id, discount_amount))

    def set_shipping_cost(self, shipping_cost: Money) -> None:
        guard.against_negative_money(shipping_cost, "shipping_cost")
        self._require_not_terminal("change the shipping cost of")

        changed = shipping_cost != self.shipping_cost
        totals = self._stage(shipping_cost=shipping_cost)

        self._commit(totals)
        if changed:
            self._record(self._totals_recalculated())

    def set_tax(self, tax: Money) -> None:
        guard.against_negative_money(tax, "tax")
        self._require_not_terminal("change the tax of")

        changed = tax != self.tax
        totals = self._stage(tax=tax)

        self._commit(totals)
        if changed:
            self._record(self._totals_recalculated())

    def recalculate_totals(self) -> None:
        """Recompute totals from the current lines and validate invariants."""
        self._commit(self._stage())

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move along the transition table; raises on any other pair."""
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateTransitionError(self.status, new_status)

        # invariants are validated against the target status
        self._stage(status=new_status)

        now = _utcnow()
        self.status = new_status
        self.updated_at = now
        if new_status == OrderStatus.SHIPPED:
            self.shipped_date = now
        elif new_status == OrderStatus.DELIVERED:
            self.delivered_date = now

    def confirm(self) -> None:
        """Transition PENDING -> PROCESSING."""
        self.transition_to(OrderStatus.PROCESSING)
        self._record(OrderConfirmed(self.id, self.user_id))

    def ship(self) -> None:
        self._expect_status(OrderStatus.PROCESSING, "ship")
        self.transition_to(OrderStatus.SHIPPED)
        self._record(OrderShipped(self.id, self.user_id, self.shipped_date))

    def deliver(self) -> None:
        self._expect_status(OrderStatus.SHIPPED, "deliver")
        self.transition_to(OrderStatus.DELIVERED)
        self._record(OrderDelivered(self.id, self.user_id, self.delivered_date))

    def cancel(self, reason: str | None = None) -> None:
        if self.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise BusinessRuleError("Cannot cancel a shipped or delivered order")
        self.transition_to(OrderStatus.CANCELLED)
        self._record(OrderCancelled(self.id, self.user_id, reason))

    def refund(self) -> None:
        self._expect_status(OrderStatus.DELIVERED, "refund")
        self.transition_to(OrderStatus.REFUNDED)
        self._record(OrderRefunded(self.id, self.user_id, self.total_amount))

    def put_on_hold(self, reason: str | None = None) -> None:
        self._expect_status(OrderStatus.PENDING, "put on hold")
        self.transition_to(OrderStatus.ON_HOLD)
        self._record(OrderPutOnHold(self.id, self.user_id, reason))

    # --- Payment side (independent of fulfillment) ----------------------------

    def set_payment_status(self, status: PaymentStatus) -> None:
        guard.against_none(status, "payment_status")
        old_status = self.payment_status
        self.payment_status = status
        self.updated_at = _utcnow()
        if old_status != status:
            self._record(
                PaymentStatusChanged(self.id, self.user_id, old_status.value, status.value)
            )

    def set_payment_method(self, payment_method: str) -> None:
        guard.against_empty(payment_method, "payment_method")
        old_method = self.payment_method
        self.payment_method = payment_method
        self.updated_at = _utcnow()
        if old_method != payment_method:
            self._record(
                PaymentMethodChanged(self.id, self.user_id, old_method, payment_method)
            )

    # --- Splitting ------------------------------------------------------------

    def add_split_item(self, source_item: OrderItem, quantity: int) -> OrderItem:
        """Take over *quantity* units of a line from the parent order.

        The unit price locked on the source line is kept and no stock
        check is made; the units were already ordered.
        """
        guard.against_none(source_item, "source_item")
        guard.against_non_positive(quantity, "quantity")
        if not self.is_split_order:
            raise InvalidOperationError("Only split orders can take over lines of another order")
        self._require_status("add items to", OrderStatus.PENDING)

        item = OrderItem.create(
            order_id=self.id,
            product_id=source_item.product_id,
            product_name=source_item.product_name,
            quantity=quantity,
            unit_price=source_item.unit_price,
        )
        return self._append_item(item)

    def release_quantity(self, item_id: str, quantity: int) -> None:
        """Move *quantity* units of a line out to a split order."""
        guard.against_non_positive(quantity, "quantity")
        self._require_status("split", OrderStatus.PENDING, OrderStatus.PROCESSING)
        item = self.find_item(item_id)
        if quantity >= item.quantity:
            raise ValidationError(
                f"Cannot split {quantity} of {item.product_name}: at least one "
                f"of the {item.quantity} ordered units must stay on the line"
            )
        self._change_quantity(item, item.quantity - quantity)

    def restore_quantity(self, item_id: str, quantity: int) -> None:
        """Take back units previously released to a split order."""
        guard.against_non_positive(quantity, "quantity")
        self._require_status("merge a split back into", OrderStatus.PENDING, OrderStatus.PROCESSING)
        item = self.find_item(item_id)
        self._change_quantity(item, item.quantity + quantity)

    # --- Internal helpers -----------------------------------------------------

    def _append_item(self, item: OrderItem) -> OrderItem:
        totals = self._stage(line_totals=[*self._line_totals(), item.total_price])

        self.items.append(item)
        self._commit(totals)
        self._record(
            OrderItemAdded(
                self.id,
                self.user_id,
                item.id,
                item.product_id,
                item.quantity,
                item.unit_price,
                item.total_price,
            )
        )
        return item

    def _change_quantity(self, item: OrderItem, new_quantity: int) -> None:
        old_quantity = item.quantity
        old_total = item.total_price
        totals = self._stage(
            line_totals=[
                i.total_for(new_quantity) if i is item else i.total_price
                for i in self.items
            ]
        )

        item.update_quantity(new_quantity)
        self._commit(totals)
        self._record(
            OrderItemUpdated(
                self.id,
                self.user_id,
                item.id,
                item.product_id,
                old_quantity,
                new_quantity,
                old_total,
                item.total_price,
            )
        )

    def _line_totals(self) -> list[Money]:
        return [item.total_price for item in self.items]

    def _stage(
        self,
        *,
        line_totals: list[Money] | None = None,
        status: OrderStatus | None = None,
        **changes: Any,
    ) -> OrderTotals:
        """Phase 1: compute totals for the proposed state and validate it.

        *changes* override ``coupon_discount``, ``gift_card_discount``,
        ``shipping_cost`` or ``tax``.  Nothing on the aggregate is touched.
        """
        values = {
            "coupon_discount": self.coupon_discount,
            "gift_card_discount": self.gift_card_discount,
            "shipping_cost": self.shipping_cost,
            "tax": self.tax,
        }
        values.update(changes)
        if line_totals is None:
            line_totals = self._line_totals()

        totals = calculate_totals(line_totals, self.currency, **values)
        self._check_invariants(totals, len(line_totals), status or self.status)
        return totals

    @staticmethod
    def _check_invariants(totals: OrderTotals, item_count: int, status: OrderStatus) -> None:
        if totals.total_amount.is_negative:
            raise BusinessRuleError("Order total cannot be negative")
        if item_count == 0 and status != OrderStatus.CANCELLED:
            raise BusinessRuleError("Order must contain at least one item")

    def _commit(self, totals: OrderTotals) -> None:
        """Phase 2: write staged totals onto the aggregate."""
        self.sub_total = totals.sub_total
        self.coupon_discount = totals.coupon_discount
        self.gift_card_discount = totals.gift_card_discount
        self.shipping_cost = totals.shipping_cost
        self.tax = totals.tax
        self.total_amount = totals.total_amount
        self.updated_at = _utcnow()

    def _require_status(self, action: str, *allowed: OrderStatus) -> None:
        if self.status not in allowed:
            raise InvalidOperationError(
                f"Cannot {action} an order in {self.status.value} status"
            )

    def _require_not_terminal(self, action: str) -> None:
        if self.status.is_terminal:
            raise InvalidOperationError(
                f"Cannot {action} an order in {self.status.value} status"
            )

    def _expect_status(self, expected: OrderStatus, action: str) -> None:
        if self.status != expected:
            raise BusinessRuleError(
                f"Cannot {action} order {self.order_number}: order must be in "
                f"{expected.value} status, current status is {self.status.value}"
            )

    def _totals_recalculated(self) -> OrderTotalsRecalculated:
        return OrderTotalsRecalculated(
            self.id,
            self.user_id,
            self.sub_total,
            self.shipping_cost,
            self.tax,
            self.coupon_discount,
            self.gift_card_discount,
            self.total_amount,
        )
