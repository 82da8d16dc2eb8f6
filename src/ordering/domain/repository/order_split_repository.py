"""Abstract repository for OrderSplit aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordering.domain.model.order_split import OrderSplit


class OrderSplitRepository(ABC):

    @abstractmethod
    def get_by_id(self, split_id: str) -> OrderSplit | None:
        """Return a split record by its ID, or None if not found."""

    @abstractmethod
    def save(self, order_split: OrderSplit) -> None:
        """Persist a new or updated split record (optimistic versioning)."""
