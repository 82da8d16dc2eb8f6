"""Unit tests for the OrderSplit aggregate."""

from datetime import timezone

import pytest

from ordering.domain.exceptions import (
    InvalidOperationError,
    InvalidStateTransitionError,
    ValidationError,
)
from ordering.domain.model.order_split import OrderSplit, OrderSplitStatus


def _split() -> OrderSplit:
    return OrderSplit.create("order-1", "order-2", "Ship to office")


class TestOrderSplitCreation:

    def test_happy_path(self):
        split = _split()
        assert split.status == OrderSplitStatus.PENDING
        assert split.items == []
        (event,) = split.pending_events
        assert event.event_type == "OrderSplitCreated"
        assert event.split_reason == "Ship to office"

    def test_split_into_itself_rejected(self):
        with pytest.raises(ValidationError, match="into itself"):
            OrderSplit.create("order-1", "order-1", "reason")

    def test_reason_required(self):
        with pytest.raises(ValidationError):
            OrderSplit.create("order-1", "order-2", "  ")

    def test_add_item(self):
        split = _split()
        item = split.add_item("item-1", "item-9", 2)
        assert item.order_split_id == split.id
        assert split.items == [item]

    def test_timestamps_are_utc(self):
        split = _split()
        assert split.created_at.tzinfo is timezone.utc
        assert split.updated_at is None
        split.mark_as_processing()
        assert split.updated_at.tzinfo is timezone.utc
        assert split.updated_at >= split.created_at

    def test_add_item_after_pending_rejected(self):
        split = _split()
        split.mark_as_processing()
        with pytest.raises(InvalidOperationError):
            split.add_item("item-1", "item-9", 2)


class TestOrderSplitTransitions:

    def test_processing_then_complete(self):
        split = _split()
        split.mark_as_processing()
        split.complete()
        assert split.status == OrderSplitStatus.COMPLETED
        assert [e.event_type for e in split.pending_events] == [
            "OrderSplitCreated",
            "OrderSplitProcessing",
            "OrderSplitCompleted",
        ]

    def test_complete_straight_from_pending(self):
        split = _split()
        split.complete()
        assert split.status == OrderSplitStatus.COMPLETED

    def test_processing_twice_rejected(self):
        split = _split()
        split.mark_as_processing()
        with pytest.raises(InvalidStateTransitionError):
            split.mark_as_processing()

    def test_cancel_completed_rejected(self):
        split = _split()
        split.complete()
        with pytest.raises(InvalidStateTransitionError):
            split.cancel()

    def test_cancel_twice_rejected(self):
        split = _split()
        split.cancel()
        assert split.status == OrderSplitStatus.CANCELLED
        with pytest.raises(InvalidStateTransitionError):
            split.cancel()
