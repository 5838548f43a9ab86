"""
Product ledger: the only writer of stock, availability and rating.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction

from main.domain.errors import NotFound
from main.domain.product import Product
from main.infra.repositories import ProductRepository


logger = logging.getLogger(__name__)


class ProductLedger:
    """Service for atomic product record updates."""

    def __init__(self, product_repo: ProductRepository | None = None):
        self.product_repo = product_repo or ProductRepository()

    @transaction.atomic
    def adjust_stock(self, product_id: UUID, delta: int) -> Product:
        """
        Apply a stock delta under a row lock.

        Negative deltas consume stock, positive ones restore it. The result
        is floored at zero (logged as a warning); zero stock disables the
        product.
        """
        product = self.product_repo.get_by_id(product_id, for_update=True)
        if product is None:
            raise NotFound(f"Product {product_id} not found")

        previous_quantity = product.stock_quantity
        clamped = product.adjust_stock(delta)
        if clamped:
            logger.warning(
                "stock_clamped_to_zero",
                extra={
                    "product_id": str(product_id),
                    "delta": delta,
                    "previous_quantity": previous_quantity,
                },
            )
        self.product_repo.save(product)

        logger.info(
            "stock_adjusted",
            extra={
                "product_id": str(product_id),
                "delta": delta,
                "previous_quantity": previous_quantity,
                "new_quantity": product.stock_quantity,
            },
        )
        return product

    def set_average_rating(self, product_id: UUID, rating: Decimal) -> Product:
        """Overwrite the denormalized average rating."""
        if not self.product_repo.update_average_rating(product_id, rating):
            raise NotFound(f"Product {product_id} not found")
        return self.product_repo.get_by_id(product_id)

    @transaction.atomic
    def set_availability(self, product_id: UUID, is_available: bool) -> Product:
        """Manually enable or disable a product."""
        product = self.product_repo.get_by_id(product_id, for_update=True)
        if product is None:
            raise NotFound(f"Product {product_id} not found")
        product.set_availability(is_available)
        return self.product_repo.save(product)

    def get_product(self, product_id: UUID) -> Product:
        product = self.product_repo.get_by_id(product_id)
        if product is None:
            raise NotFound(f"Product {product_id} not found")
        return product
