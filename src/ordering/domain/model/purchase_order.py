"""PurchaseOrder aggregate for B2B procurement.

Shares the line-item and totals discipline of Order (stage, validate,
commit) without discounts or shipping: ``total_amount = sub_total + tax``.
Its status machine is an approval workflow rather than a fulfillment one.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ordering.domain import guard
from ordering.domain.events.purchase_order_events import (
    PurchaseOrderApproved,
    PurchaseOrderCancelled,
    PurchaseOrderCreated,
    PurchaseOrderItemAdded,
    PurchaseOrderItemRemoved,
    PurchaseOrderItemUpdated,
    PurchaseOrderRejected,
    PurchaseOrderSubmitted,
)
from ordering.domain.exceptions import (
    BusinessRuleError,
    EntityNotFoundError,
    InvalidOperationError,
    InvalidStateTransitionError,
)
from ordering.domain.model.aggregate import AggregateRoot
from ordering.domain.model.line_item import PurchaseOrderItem
from ordering.domain.model.product import Product
from ordering.domain.model.value_objects import DEFAULT_CURRENCY, Money


class PurchaseOrderStatus(Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            PurchaseOrderStatus.APPROVED,
            PurchaseOrderStatus.REJECTED,
            PurchaseOrderStatus.CANCELLED,
        )


ALLOWED_TRANSITIONS: dict[PurchaseOrderStatus, frozenset[PurchaseOrderStatus]] = {
    PurchaseOrderStatus.DRAFT: frozenset(
        {PurchaseOrderStatus.SUBMITTED, PurchaseOrderStatus.CANCELLED}
    ),
    PurchaseOrderStatus.SUBMITTED: frozenset(
        {
            PurchaseOrderStatus.APPROVED,
            PurchaseOrderStatus.REJECTED,
            PurchaseOrderStatus.CANCELLED,
        }
    ),
    PurchaseOrderStatus.APPROVED: frozenset(),
    PurchaseOrderStatus.REJECTED: frozenset(),
    PurchaseOrderStatus.CANCELLED: frozenset(),
}


def generate_po_number() -> str:
    return f"PO-{random.randint(10_000_000, 99_999_999)}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PurchaseOrder(AggregateRoot):
    id: str
    organization_id: str
    po_number: str
    b2b_user_id: str | None = None
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT
    currency: str = DEFAULT_CURRENCY
    items: list[PurchaseOrderItem] = field(default_factory=list)
    sub_total: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    notes: str | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    approved_by_user_id: str | None = None
    expected_delivery_date: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    version: int = 0

    @staticmethod
    def create(
        organization_id: str,
        po_number: str | None = None,
        b2b_user_id: str | None = None,
        expected_delivery_date: datetime | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> PurchaseOrder:
        guard.against_empty(organization_id, "organization_id")
        if po_number is not None:
            guard.against_empty(po_number, "po_number")

        zero = Money.zero(currency)
        purchase_order = PurchaseOrder(
            id=str(uuid.uuid4()),
            organization_id=organization_id,
            po_number=po_number.strip() if po_number else generate_po_number(),
            b2b_user_id=b2b_user_id,
            currency=zero.currency,
            sub_total=zero,
            tax=zero,
            total_amount=zero,
            expected_delivery_date=expected_delivery_date,
        )
        purchase_order._record(
            PurchaseOrderCreated(
                purchase_order.id,
                organization_id,
                b2b_user_id,
                purchase_order.po_number,
                zero,
            )
        )
        return purchase_order

    # --- Line items (DRAFT only) ----------------------------------------------

    def add_item(
        self,
        product: Product,
        quantity: int,
        unit_price: Money,
        notes: str | None = None,
    ) -> PurchaseOrderItem:
        """Add a line at a negotiated *unit_price*; no stock check for B2B."""
        guard.against_none(product, "product")
        guard.against_non_positive(quantity, "quantity")
        guard.against_negative_money(unit_price, "unit_price")
        self._require_draft("add items to")

        item = PurchaseOrderItem.create(
            purchase_order_id=self.id,
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=unit_price,
            notes=notes,
        )
        sub_total, total = self._stage([*self._line_totals(), item.total_price])

        self.items.append(item)
        self._commit(sub_total, total)
        self._record(
            PurchaseOrderItemAdded(self.id, item.id, product.id, quantity, unit_price)
        )
        return item

    def remove_item(self, item_id: str) -> None:
        self._require_draft("remove items from")
        item = self._find_item(item_id)

        remaining = [i for i in self.items if i.id != item.id]
        sub_total, total = self._stage([i.total_price for i in remaining])

        self.items = remaining
        self._commit(sub_total, total)
        self._record(PurchaseOrderItemRemoved(self.id, item.id, item.product_id))

    def update_item_quantity(self, item_id: str, new_quantity: int) -> None:
        guard.against_non_positive(new_quantity, "quantity")
        self._require_draft("change item quantities on")
        item = self._find_item(item_id)

        old_quantity = item.quantity
        sub_total, total = self._stage(
            [i.total_for(new_quantity) if i is item else i.total_price for i in self.items]
        )

        item.update_quantity(new_quantity)
        self._commit(sub_total, total)
        self._record(
            PurchaseOrderItemUpdated(
                self.id, item.id, item.product_id, old_quantity, new_quantity
            )
        )

    def set_tax(self, tax: Money) -> None:
        """Tax is computed externally from the organization's tax rate."""
        guard.against_negative_money(tax, "tax")
        self._require_draft("change the tax of")

        sub_total, total = self._stage(self._line_totals(), tax=tax)

        self.tax = tax
        self._commit(sub_total, total)

    def update_notes(self, notes: str | None) -> None:
        self._require_draft("update the notes of")
        self.notes = notes
        self.updated_at = _utcnow()

    # --- Approval workflow ----------------------------------------------------

    def submit(self) -> None:
        if self.status == PurchaseOrderStatus.DRAFT:
            if not self.items:
                raise BusinessRuleError("Cannot submit an empty purchase order")
            if self.total_amount.amount <= 0:
                raise BusinessRuleError("Purchase order total must be positive")

        self._transition_to(PurchaseOrderStatus.SUBMITTED)
        self.submitted_at = self.updated_at
        self._record(
            PurchaseOrderSubmitted(
                self.id, self.organization_id, self.po_number, self.total_amount
            )
        )

    def approve(self, approved_by_user_id: str) -> None:
        guard.against_empty(approved_by_user_id, "approved_by_user_id")
        self._transition_to(PurchaseOrderStatus.APPROVED)
        self.approved_at = self.updated_at
        self.approved_by_user_id = approved_by_user_id
        self._record(
            PurchaseOrderApproved(
                self.id,
                self.organization_id,
                approved_by_user_id,
                self.po_number,
                self.total_amount,
            )
        )

    def reject(self, reason: str) -> None:
        guard.against_empty(reason, "reason")
        self._transition_to(PurchaseOrderStatus.REJECTED)
        rejection = f"Rejection reason: {reason.strip()}"
        self.notes = f"{self.notes}\n{rejection}" if self.notes and self.notes.strip() else rejection
        self._record(
            PurchaseOrderRejected(self.id, self.organization_id, self.po_number, reason)
        )

    def cancel(self) -> None:
        self._transition_to(PurchaseOrderStatus.CANCELLED)
        self._record(PurchaseOrderCancelled(self.id, self.organization_id, self.po_number))

    # --- Internal helpers -----------------------------------------------------

    def _transition_to(self, new_status: PurchaseOrderStatus) -> None:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateTransitionError(self.status, new_status)
        self.status = new_status
        self.updated_at = _utcnow()

    def _line_totals(self) -> list[Money]:
        return [item.total_price for item in self.items]

    def _stage(self, line_totals: list[Money], tax: Money | None = None) -> tuple[Money, Money]:
        """Compute (sub_total, total_amount) for the proposed lines and validate."""
        sub_total = Money.zero(self.currency)
        for line_total in line_totals:
            sub_total = sub_total + line_total
        total = sub_total + (self.tax if tax is None else tax)

        if total.is_negative:
            raise BusinessRuleError("Purchase order total cannot be negative")
        if not line_totals and self.status != PurchaseOrderStatus.CANCELLED:
            raise BusinessRuleError("Purchase order must contain at least one item")
        return sub_total, total

    def _commit(self, sub_total: Money, total: Money) -> None:
        self.sub_total = sub_total
        self.total_amount = total
        self.updated_at = _utcnow()

    def _find_item(self, item_id: str) -> PurchaseOrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise EntityNotFoundError(
            f"Purchase order item '{item_id}' not found in {self.po_number}"
        )

    def _require_draft(self, action: str) -> None:
        if self.status != PurchaseOrderStatus.DRAFT:
            raise InvalidOperationError(
                f"Cannot {action} a purchase order in {self.status.value} status"
            )
