"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Versioned aggregates are stored and handed out as copies, the way a
real store would, so two loads of the same order are independent
objects and optimistic concurrency can be exercised.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from ordering.domain.events.base import DomainEvent
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import ConcurrencyError
from ordering.domain.model.coupon import Coupon
from ordering.domain.model.order import Order
from ordering.domain.model.order_split import OrderSplit
from ordering.domain.model.product import Product
from ordering.domain.model.purchase_order import PurchaseOrder
from ordering.domain.repository.coupon_repository import CouponRepository
from ordering.domain.repository.order_repository import OrderRepository
from ordering.domain.repository.order_split_repository import OrderSplitRepository
from ordering.domain.repository.product_repository import ProductRepository
from ordering.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)


class _VersionedStore:

    def __init__(self) -> None:
        self._store: dict = {}

    def get(self, key):
        stored = self._store.get(key)
        return copy.deepcopy(stored) if stored is not None else None

    def values(self) -> list:
        return [copy.deepcopy(v) for v in self._store.values()]

    def put(self, aggregate) -> None:
        stored = self._store.get(aggregate.id)
        stored_version = stored.version if stored is not None else 0
        if stored_version != aggregate.version:
            raise ConcurrencyError(
                f"{type(aggregate).__name__} {aggregate.id} was modified concurrently"
            )
        aggregate.version += 1
        snapshot = copy.deepcopy(aggregate)
        snapshot.pop_events()
        self._store[aggregate.id] = snapshot


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store = _VersionedStore()
        for order in orders or []:
            self._store.put(order)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return self._store.values()

    def save(self, order: Order) -> None:
        self._store.put(order)


class FakeOrderSplitRepository(OrderSplitRepository):

    def __init__(self) -> None:
        self._store = _VersionedStore()

    def get_by_id(self, split_id: str) -> OrderSplit | None:
        return self._store.get(split_id)

    def save(self, order_split: OrderSplit) -> None:
        self._store.put(order_split)


class FakePurchaseOrderRepository(PurchaseOrderRepository):

    def __init__(self) -> None:
        self._store = _VersionedStore()

    def get_by_id(self, purchase_order_id: str) -> PurchaseOrder | None:
        return self._store.get(purchase_order_id)

    def save(self, purchase_order: PurchaseOrder) -> None:
        self._store.put(purchase_order)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeCouponRepository(CouponRepository):

    def __init__(self, coupons: list[Coupon] | None = None) -> None:
        self._store: dict[str, Coupon] = {}
        for c in coupons or []:
            self._store[c.code.upper()] = c

    def get_by_code(self, code: str) -> Coupon | None:
        return self._store.get(code.upper())

    def save(self, coupon: Coupon) -> None:
        self._store[coupon.code.upper()] = coupon


class RecordingEventPublisher(EventPublisher):

    def __init__(self) -> None:
        self.published: list[DomainEvent] = []

    def publish(self, events: Iterable[DomainEvent]) -> None:
        self.published.extend(events)

    @property
    def event_types(self) -> list[str]:
        return [e.event_type for e in self.published]
