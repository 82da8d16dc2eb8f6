"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from ordering.domain import guard
from ordering.domain.exceptions import ValidationError
from ordering.domain.model.product import Product
from ordering.domain.model.value_objects import Money
from ordering.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock_quantity: int = 0,
        discount_price: str | None = None,
    ) -> Product:
        """Add a new product to the catalog snapshot."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        guard.against_negative(stock_quantity, "stock_quantity")

        existing = self._product_repo.get_by_name(name)
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            stock_quantity=stock_quantity,
            discount_price=Money.of(discount_price) if discount_price is not None else None,
        )
        if product.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        self._product_repo.save(product)
        logger.info("Added product %s (%s) at %s", product.id, product.name, product.price)
        return product
