"""Application service: Show Order query."""

from __future__ import annotations

from ordering.application.dto import OrderDTO, order_to_dto
from ordering.domain.exceptions import EntityNotFoundError
from ordering.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order_to_dto(order)

    def list_all(self) -> list[OrderDTO]:
        return [order_to_dto(order) for order in self._order_repo.list_all()]
