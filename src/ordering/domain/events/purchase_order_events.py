"""Events raised by the PurchaseOrder aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from ordering.domain.events.base import DomainEvent
from ordering.domain.model.value_objects import Money


@dataclass(frozen=True)
class PurchaseOrderCreated(DomainEvent):
    purchase_order_id: str
    organization_id: str
    b2b_user_id: str | None
    po_number: str
    total_amount: Money


@dataclass(frozen=True)
class PurchaseOrderItemAdded(DomainEvent):
    purchase_order_id: str
    item_id: str
    product_id: str
    quantity: int
    unit_price: Money


@dataclass(frozen=True)
class PurchaseOrderItemRemoved(DomainEvent):
    purchase_order_id: str
    item_id: str
    product_id: str


@dataclass(frozen=True)
class PurchaseOrderItemUpdated(DomainEvent):
    purchase_order_id: str
    item_id: str
    product_id: str
    old_quantity: int
    new_quantity: int


@dataclass(frozen=True)
class PurchaseOrderSubmitted(DomainEvent):
    purchase_order_id: str
    organization_id: str
    po_number: str
    total_amount: Money


@dataclass(frozen=True)
class PurchaseOrderApproved(DomainEvent):
    purchase_order_id: str
    organization_id: str
    approved_by_user_id: str
    po_number: str
    total_amount: Money


@dataclass(frozen=True)
class PurchaseOrderRejected(DomainEvent):
    purchase_order_id: str
    organization_id: str
    po_number: str
    reason: str


@dataclass(frozen=True)
class PurchaseOrderCancelled(DomainEvent):
    purchase_order_id: str
    organization_id: str
    po_number: str
