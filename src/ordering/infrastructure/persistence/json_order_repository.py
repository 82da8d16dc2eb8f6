"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ordering.domain.exceptions import ConcurrencyError
from ordering.domain.model.line_item import OrderItem
from ordering.domain.model.order import Order, OrderStatus, PaymentStatus
from ordering.domain.repository.order_repository import OrderRepository
from ordering.infrastructure.persistence.json_codec import (
    datetime_from_raw,
    datetime_to_raw,
    money_from_raw,
    money_to_raw,
)

logger = logging.getLogger(__name__)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        index = next((i for i, raw in enumerate(orders) if raw["id"] == order.id), None)
        stored_version = orders[index]["version"] if index is not None else 0
        if stored_version != order.version:
            logger.warning(
                "Version conflict on order %s (stored %d, in hand %d)",
                order.order_number,
                stored_version,
                order.version,
            )
            raise ConcurrencyError(
                f"Order {order.order_number} was modified concurrently "
                f"(stored version {stored_version}, expected {order.version})"
            )

        order.version += 1
        if index is None:
            orders.append(self._to_raw(order))
        else:
            orders[index] = self._to_raw(order)

        self._persist_raw(orders)
        logger.debug("Saved order %s at version %d", order.order_number, order.version)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "address_id": order.address_id,
            "order_number": order.order_number,
            "currency": order.currency,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method,
            "coupon_id": order.coupon_id,
            "parent_order_id": order.parent_order_id,
            "sub_total": money_to_raw(order.sub_total),
            "shipping_cost": money_to_raw(order.shipping_cost),
            "tax": money_to_raw(order.tax),
            "coupon_discount": money_to_raw(order.coupon_discount),
            "gift_card_discount": money_to_raw(order.gift_card_discount),
            "total_amount": money_to_raw(order.total_amount),
            "shipped_date": datetime_to_raw(order.shipped_date),
            "delivered_date": datetime_to_raw(order.delivered_date),
            "created_at": datetime_to_raw(order.created_at),
            "updated_at": datetime_to_raw(order.updated_at),
            "version": order.version,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": money_to_raw(item.unit_price),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=i["quantity"],
                unit_price=money_from_raw(i["unit_price"]),
                order_id=raw["id"],
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            address_id=raw["address_id"],
            order_number=raw["order_number"],
            currency=raw["currency"],
            items=items,
            sub_total=money_from_raw(raw["sub_total"]),
            shipping_cost=money_from_raw(raw["shipping_cost"]),
            tax=money_from_raw(raw["tax"]),
            coupon_discount=money_from_raw(raw["coupon_discount"]),
            gift_card_discount=money_from_raw(raw["gift_card_discount"]),
            total_amount=money_from_raw(raw["total_amount"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            payment_method=raw["payment_method"],
            coupon_id=raw["coupon_id"],
            parent_order_id=raw["parent_order_id"],
            shipped_date=datetime_from_raw(raw["shipped_date"]),
            delivered_date=datetime_from_raw(raw["delivered_date"]),
            created_at=datetime_from_raw(raw["created_at"]),
            updated_at=datetime_from_raw(raw["updated_at"]),
            version=raw["version"],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
