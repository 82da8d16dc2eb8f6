"""Events raised by the OrderSplit aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from ordering.domain.events.base import DomainEvent


@dataclass(frozen=True)
class OrderSplitCreated(DomainEvent):
    order_split_id: str
    original_order_id: str
    split_order_id: str
    split_reason: str


@dataclass(frozen=True)
class OrderSplitProcessing(DomainEvent):
    order_split_id: str
    original_order_id: str
    split_order_id: str


@dataclass(frozen=True)
class OrderSplitCompleted(DomainEvent):
    order_split_id: str
    original_order_id: str
    split_order_id: str


@dataclass(frozen=True)
class OrderSplitCancelled(DomainEvent):
    order_split_id: str
    original_order_id: str
    split_order_id: str
