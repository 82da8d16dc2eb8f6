"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordering.domain.model.order import Order
from ordering.domain.model.order_split import OrderSplit
from ordering.domain.model.purchase_order import PurchaseOrder
from ordering.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class PurchaseOrderLineSpec:
    """Input: a B2B line with its negotiated unit price."""

    product_name: str
    quantity: int
    unit_price: str
    notes: str | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    item_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    user_id: str
    status: str
    payment_status: str
    items: list[OrderLineItemDTO]
    sub_total: str
    coupon_discount: str | None
    gift_card_discount: str | None
    shipping_cost: str
    tax: str
    total: str
    created_at: str
    parent_order_id: str | None = None


@dataclass(frozen=True)
class OrderSplitDTO:
    id: str
    original_order_id: str
    split_order_id: str
    split_reason: str
    status: str
    moved_quantities: dict[str, int]


@dataclass(frozen=True)
class PurchaseOrderDTO:
    id: str
    po_number: str
    organization_id: str
    status: str
    item_count: int
    sub_total: str
    tax: str
    total: str
    notes: str | None


# --- Mapping ------------------------------------------------------------------


def _fmt(money: Money | None) -> str | None:
    return None if money is None else str(money)


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineItemDTO(
                item_id=item.id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=str(item.unit_price),
                line_total=str(item.total_price),
            )
            for item in order.items
        ],
        sub_total=str(order.sub_total),
        coupon_discount=_fmt(order.coupon_discount),
        gift_card_discount=_fmt(order.gift_card_discount),
        shipping_cost=str(order.shipping_cost),
        tax=str(order.tax),
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        parent_order_id=order.parent_order_id,
    )


def order_split_to_dto(order_split: OrderSplit) -> OrderSplitDTO:
    return OrderSplitDTO(
        id=order_split.id,
        original_order_id=order_split.original_order_id,
        split_order_id=order_split.split_order_id,
        split_reason=order_split.split_reason,
        status=order_split.status.value,
        moved_quantities={
            item.original_order_item_id: item.quantity for item in order_split.items
        },
    )


def purchase_order_to_dto(purchase_order: PurchaseOrder) -> PurchaseOrderDTO:
    return PurchaseOrderDTO(
        id=purchase_order.id,
        po_number=purchase_order.po_number,
        organization_id=purchase_order.organization_id,
        status=purchase_order.status.value,
        item_count=len(purchase_order.items),
        sub_total=str(purchase_order.sub_total),
        tax=str(purchase_order.tax),
        total=str(purchase_order.total_amount),
        notes=purchase_order.notes,
    )
