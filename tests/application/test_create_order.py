"""Integration tests for the CreateOrder use case."""

import pytest

from ordering.application.create_order import CreateOrderHandler
from ordering.application.dto import OrderItemSpec
from ordering.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from ordering.domain.model.order import OrderStatus
from ordering.domain.model.product import Product
from ordering.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository, RecordingEventPublisher


def _setup():
    products = [
        Product(id="1", name="Widget", price=Money.of("15.00"), stock_quantity=100),
        Product(id="2", name="Gadget", price=Money.of("25.00"), stock_quantity=50),
    ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    publisher = RecordingEventPublisher()
    handler = CreateOrderHandler(order_repo, product_repo, publisher)
    return handler, order_repo, publisher


class TestCreateOrderHappyPath:

    def test_creates_and_persists_order(self):
        handler, order_repo, _ = _setup()
        specs = [OrderItemSpec("Widget", 3), OrderItemSpec("Gadget", 5)]

        dto = handler.handle("user-1", "addr-1", specs)

        assert dto.status == "PENDING"
        assert len(dto.items) == 2
        assert dto.sub_total == "$170.00"
        assert dto.total == "$170.00"

        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.status == OrderStatus.PENDING
        assert saved.version == 1

    def test_events_published_after_save(self):
        handler, _, publisher = _setup()
        handler.handle("user-1", "addr-1", [OrderItemSpec("Widget", 1)])
        assert publisher.event_types == ["OrderCreated", "OrderItemAdded"]

    def test_shipping_and_tax(self):
        handler, _, publisher = _setup()
        dto = handler.handle(
            "user-1",
            "addr-1",
            [OrderItemSpec("Widget", 2)],
            shipping_cost="5.00",
            tax="3.40",
        )
        assert dto.shipping_cost == "$5.00"
        assert dto.tax == "$3.40"
        assert dto.total == "$38.40"
        assert publisher.event_types.count("OrderTotalsRecalculated") == 2

    def test_product_lookup_is_case_insensitive(self):
        handler, _, _ = _setup()
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec("widget", 1)])
        assert dto.items[0].product_name == "Widget"


class TestCreateOrderValidation:

    def test_unknown_product_rejected(self):
        handler, order_repo, publisher = _setup()
        with pytest.raises(EntityNotFoundError, match="Doohickey"):
            handler.handle("user-1", "addr-1", [OrderItemSpec("Doohickey", 1)])
        assert order_repo.list_all() == []
        assert publisher.published == []

    def test_no_items_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("user-1", "addr-1", [])

    def test_insufficient_stock_rejected(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle("user-1", "addr-1", [OrderItemSpec("Gadget", 51)])
        assert order_repo.list_all() == []

    def test_negative_shipping_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle("user-1", "addr-1", [OrderItemSpec("Widget", 1)], shipping_cost="-1")
