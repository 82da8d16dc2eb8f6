"""Domain service: Order Splitting.

Partitions an order into the original and a derived split order, and
merges a split back when it is cancelled.  It lives in the domain layer
because it coordinates three aggregates (original order, split order,
OrderSplit record) under one business rule.

The two-phase approach (validate-then-mutate) ensures we never leave the
original order half-split: lines, quantities and the resulting totals are
all checked before the first line is touched.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordering.domain import guard
from ordering.domain.exceptions import BusinessRuleError, ValidationError
from ordering.domain.model.line_item import OrderItem
from ordering.domain.model.order import Order, OrderStatus, calculate_totals
from ordering.domain.model.order_split import OrderSplit
from ordering.domain.model.value_objects import Money

SPLITTABLE_STATUSES = (OrderStatus.PENDING, OrderStatus.PROCESSING)


@dataclass(frozen=True)
class SplitResult:
    split_order: Order
    order_split: OrderSplit


class OrderSplittingService:

    def split(
        self,
        original: Order,
        quantities: dict[str, int],
        split_reason: str,
        new_address_id: str | None = None,
    ) -> SplitResult:
        """Move ``{order_item_id: quantity}`` from *original* to a new order.

        Phase 1 validates status, line ids, quantities and the original's
        resulting totals before any aggregate is touched.  Phase 2 builds
        the split order at the locked unit prices and takes the units off
        the original lines; shipping is copied and tax follows the moved
        sub-total pro rata.
        """
        guard.against_empty(split_reason, "split_reason")

        # Phase 1: validate everything
        if original.status not in SPLITTABLE_STATUSES:
            raise BusinessRuleError(
                f"Order {original.order_number} can only be split while PENDING "
                f"or PROCESSING (current status is {original.status.value})"
            )
        if not quantities:
            raise ValidationError("Must specify at least one order item to split")

        lines: list[tuple[OrderItem, int]] = []
        for item_id, qty in quantities.items():
            item = original.find_item(item_id)
            guard.against_non_positive(qty, "quantity")
            if qty >= item.quantity:
                raise ValidationError(
                    f"Cannot split {qty} of {item.product_name} "
                    f"(only {item.quantity - 1} can leave the original line)"
                )
            lines.append((item, qty))

        moved_sub_total = Money.zero(original.currency)
        for item, qty in lines:
            moved_sub_total = moved_sub_total + item.total_for(qty)
        moved_tax = self._pro_rata_tax(original, moved_sub_total)

        # The original's totals after the move must still hold; raises
        # before anything below commits.
        remaining = {item.id: item.quantity - qty for item, qty in lines}
        calculate_totals(
            [i.total_for(remaining.get(i.id, i.quantity)) for i in original.items],
            original.currency,
            coupon_discount=original.coupon_discount,
            gift_card_discount=original.gift_card_discount,
            shipping_cost=original.shipping_cost,
            tax=original.tax - moved_tax,
        )

        # Phase 2: mutate
        split_order = Order.create(
            user_id=original.user_id,
            address_id=new_address_id or original.address_id,
            currency=original.currency,
            parent_order_id=original.id,
        )
        moved: list[tuple[OrderItem, OrderItem, int]] = []
        for item, qty in lines:
            split_item = split_order.add_split_item(item, qty)
            original.release_quantity(item.id, qty)
            moved.append((item, split_item, qty))

        split_order.set_shipping_cost(original.shipping_cost)

        if not moved_tax.is_zero:
            split_order.set_tax(moved_tax)
            original.set_tax(original.tax - moved_tax)

        order_split = OrderSplit.create(
            original_order_id=original.id,
            split_order_id=split_order.id,
            split_reason=split_reason,
            new_address_id=new_address_id,
        )
        for item, split_item, qty in moved:
            order_split.add_item(item.id, split_item.id, qty)

        return SplitResult(split_order=split_order, order_split=order_split)

    def cancel(self, order_split: OrderSplit, original: Order, split_order: Order) -> None:
        """Merge the split order's units and tax back into *original*."""
        if split_order.status != OrderStatus.PENDING:
            raise BusinessRuleError(
                f"Cannot cancel split {order_split.id}: split order "
                f"{split_order.order_number} is already {split_order.status.value}"
            )
        if order_split.status.is_terminal:
            raise BusinessRuleError(
                f"Split {order_split.id} is already {order_split.status.value}"
            )

        for split_item in order_split.items:
            original.restore_quantity(split_item.original_order_item_id, split_item.quantity)
        if not split_order.tax.is_zero:
            original.set_tax(original.tax + split_order.tax)

        split_order.cancel("Order split cancelled")
        order_split.cancel()

    @staticmethod
    def _pro_rata_tax(original: Order, moved_sub_total: Money) -> Money:
        if original.tax.is_zero or original.sub_total.is_zero:
            return Money.zero(original.currency)
        share = moved_sub_total.amount / original.sub_total.amount
        return (original.tax * share).rounded()
