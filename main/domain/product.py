"""
Domain model for Product.
"""
from __future__ import annotations

from decimal import Decimal
from uuid import UUID, uuid4

from main.domain.errors import InvalidInput


class Product:
    """Product record owned by the product ledger."""

    def __init__(
        self,
        id: UUID | None = None,
        name: str = "",
        sku: str = "",
        price: Decimal = Decimal("0.00"),
        sale_price: Decimal | None = None,
        stock_quantity: int = 0,
        is_available: bool = True,
        average_rating: Decimal = Decimal("0.00"),
    ):
        if price <= 0:
            raise InvalidInput("Price must be positive")
        if sale_price is not None and (sale_price < 0 or sale_price >= price):
            raise InvalidInput("Sale price must be non-negative and lower than price")
        if stock_quantity < 0:
            raise InvalidInput("Stock quantity cannot be negative")

        self.id = id or uuid4()
        self.name = name
        self.sku = sku
        self.price = price
        self.sale_price = sale_price
        self.stock_quantity = stock_quantity
        # Zero stock is never available.
        self.is_available = is_available and stock_quantity > 0
        self.average_rating = average_rating

    @property
    def effective_price(self) -> Decimal:
        """Sale price when one is active, list price otherwise."""
        if self.sale_price is not None and self.sale_price > 0:
            return self.sale_price
        return self.price

    def adjust_stock(self, delta: int) -> bool:
        """
        Apply a stock delta, flooring the result at zero.

        Returns True when the unclamped result would have been negative.
        Reaching zero disables the product; restocking never re-enables it.
        """
        new_quantity = self.stock_quantity + delta
        self.stock_quantity = max(0, new_quantity)
        if self.stock_quantity == 0:
            self.is_available = False
        return new_quantity < 0

    def set_availability(self, is_available: bool) -> None:
        """Toggle availability manually."""
        if is_available and self.stock_quantity == 0:
            raise InvalidInput(f"Product {self.id} has no stock and cannot be made available")
        self.is_available = is_available
