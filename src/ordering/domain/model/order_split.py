"""OrderSplit aggregate: records how an order was partitioned.

One OrderSplit links an original order to a split order derived from it
(different shipping address, different warehouse, partial fulfillment)
and remembers how many units of each original line moved over.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ordering.domain import guard
from ordering.domain.events.order_split_events import (
    OrderSplitCancelled,
    OrderSplitCompleted,
    OrderSplitCreated,
    OrderSplitProcessing,
)
from ordering.domain.exceptions import (
    InvalidOperationError,
    InvalidStateTransitionError,
    ValidationError,
)
from ordering.domain.model.aggregate import AggregateRoot


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderSplitStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderSplitStatus.COMPLETED, OrderSplitStatus.CANCELLED)


ALLOWED_TRANSITIONS: dict[OrderSplitStatus, frozenset[OrderSplitStatus]] = {
    OrderSplitStatus.PENDING: frozenset(
        {OrderSplitStatus.PROCESSING, OrderSplitStatus.COMPLETED, OrderSplitStatus.CANCELLED}
    ),
    OrderSplitStatus.PROCESSING: frozenset(
        {OrderSplitStatus.COMPLETED, OrderSplitStatus.CANCELLED}
    ),
    OrderSplitStatus.COMPLETED: frozenset(),
    OrderSplitStatus.CANCELLED: frozenset(),
}


@dataclass
class OrderSplitItem:
    id: str
    order_split_id: str
    original_order_item_id: str
    split_order_item_id: str
    quantity: int


@dataclass
class OrderSplit(AggregateRoot):
    id: str
    original_order_id: str
    split_order_id: str
    split_reason: str
    new_address_id: str | None = None
    status: OrderSplitStatus = OrderSplitStatus.PENDING
    items: list[OrderSplitItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    version: int = 0

    @staticmethod
    def create(
        original_order_id: str,
        split_order_id: str,
        split_reason: str,
        new_address_id: str | None = None,
    ) -> OrderSplit:
        guard.against_empty(original_order_id, "original_order_id")
        guard.against_empty(split_order_id, "split_order_id")
        guard.against_empty(split_reason, "split_reason")
        if original_order_id == split_order_id:
            raise ValidationError("An order cannot be split into itself")

        split = OrderSplit(
            id=str(uuid.uuid4()),
            original_order_id=original_order_id,
            split_order_id=split_order_id,
            split_reason=split_reason.strip(),
            new_address_id=new_address_id,
        )
        split._record(
            OrderSplitCreated(split.id, original_order_id, split_order_id, split.split_reason)
        )
        return split

    def add_item(
        self,
        original_order_item_id: str,
        split_order_item_id: str,
        quantity: int,
    ) -> OrderSplitItem:
        guard.against_empty(original_order_item_id, "original_order_item_id")
        guard.against_empty(split_order_item_id, "split_order_item_id")
        guard.against_non_positive(quantity, "quantity")
        if self.status != OrderSplitStatus.PENDING:
            raise InvalidOperationError(
                f"Cannot record items on a split in {self.status.value} status"
            )

        item = OrderSplitItem(
            id=str(uuid.uuid4()),
            order_split_id=self.id,
            original_order_item_id=original_order_item_id,
            split_order_item_id=split_order_item_id,
            quantity=quantity,
        )
        self.items.append(item)
        return item

    # --- State transitions ----------------------------------------------------

    def mark_as_processing(self) -> None:
        self._transition_to(OrderSplitStatus.PROCESSING)
        self._record(OrderSplitProcessing(self.id, self.original_order_id, self.split_order_id))

    def complete(self) -> None:
        self._transition_to(OrderSplitStatus.COMPLETED)
        self._record(OrderSplitCompleted(self.id, self.original_order_id, self.split_order_id))

    def cancel(self) -> None:
        self._transition_to(OrderSplitStatus.CANCELLED)
        self._record(OrderSplitCancelled(self.id, self.original_order_id, self.split_order_id))

    def _transition_to(self, new_status: OrderSplitStatus) -> None:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateTransitionError(self.status, new_status)
        self.status = new_status
        self.updated_at = _utcnow()
