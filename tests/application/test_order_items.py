"""Integration tests for adding, changing and removing order lines."""

import pytest

from ordering.application.add_order_item import AddOrderItemHandler
from ordering.application.create_order import CreateOrderHandler
from ordering.application.dto import OrderItemSpec
from ordering.application.remove_order_item import RemoveOrderItemHandler
from ordering.application.update_order_item import UpdateOrderItemHandler
from ordering.domain.exceptions import BusinessRuleError, EntityNotFoundError
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
    dto = CreateOrderHandler(order_repo, product_repo, publisher).handle(
        "user-1", "addr-1", [OrderItemSpec("Widget", 2)]
    )
    publisher.published.clear()
    return dto.id, order_repo, product_repo, publisher


class TestAddOrderItem:

    def test_adds_line(self):
        order_id, order_repo, product_repo, publisher = _setup()
        handler = AddOrderItemHandler(order_repo, product_repo, publisher)

        dto = handler.handle(order_id, "Gadget", 1)

        assert [i.product_name for i in dto.items] == ["Widget", "Gadget"]
        assert dto.total == "$55.00"
        assert publisher.event_types == ["OrderItemAdded"]
        assert order_repo.get_by_id(order_id).version == 2

    def test_unknown_order(self):
        _, order_repo, product_repo, publisher = _setup()
        handler = AddOrderItemHandler(order_repo, product_repo, publisher)
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle("missing", "Gadget", 1)

    def test_unknown_product(self):
        order_id, order_repo, product_repo, publisher = _setup()
        handler = AddOrderItemHandler(order_repo, product_repo, publisher)
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(order_id, "Doohickey", 1)


class TestUpdateOrderItem:

    def test_changes_quantity(self):
        order_id, order_repo, _, publisher = _setup()
        item_id = order_repo.get_by_id(order_id).items[0].id

        dto = UpdateOrderItemHandler(order_repo, publisher).handle(order_id, item_id, 4)

        assert dto.items[0].quantity == 4
        assert dto.total == "$60.00"
        assert publisher.event_types == ["OrderItemUpdated"]


class TestRemoveOrderItem:

    def test_removes_line(self):
        order_id, order_repo, product_repo, publisher = _setup()
        AddOrderItemHandler(order_repo, product_repo, publisher).handle(order_id, "Gadget", 1)
        gadget_id = order_repo.get_by_id(order_id).items[1].id

        dto = RemoveOrderItemHandler(order_repo, publisher).handle(order_id, gadget_id)

        assert [i.product_name for i in dto.items] == ["Widget"]
        assert publisher.event_types[-1] == "OrderItemRemoved"

    def test_last_line_cannot_be_removed(self):
        order_id, order_repo, _, publisher = _setup()
        item_id = order_repo.get_by_id(order_id).items[0].id

        with pytest.raises(BusinessRuleError):
            RemoveOrderItemHandler(order_repo, publisher).handle(order_id, item_id)

        assert len(order_repo.get_by_id(order_id).items) == 1
        assert publisher.published == []
