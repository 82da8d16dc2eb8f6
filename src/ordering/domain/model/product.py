"""Product catalog snapshot.

Products live outside the ordering core; the aggregate only reads the
price, the optional discount price and the stock level when a line is
added.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordering.domain.exceptions import ValidationError
from ordering.domain.model.value_objects import Money


@dataclass
class Product:
    id: str
    name: str
    price: Money
    stock_quantity: int = 0
    discount_price: Money | None = None

    @property
    def effective_price(self) -> Money:
        """Discount price when one is set and positive, else list price."""
        if self.discount_price is not None and self.discount_price.amount > 0:
            return self.discount_price
        return self.price

    def update_price(self, new_price: Money) -> None:
        """Change the list price.

        Existing order lines keep the price they locked when added.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
