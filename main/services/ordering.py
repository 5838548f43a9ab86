"""
Order placement: price snapshot, totals and stock reservation.
"""
from __future__ import annotations

import logging
import secrets
import string
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from main.domain.errors import Conflict, InvalidInput, NotFound
from main.domain.order import LineItemRequest, Order, OrderItem, ShippingInfo
from main.infra.repositories import OrderRepository, ProductRepository, UserRepository
from main.services.ledger import ProductLedger


logger = logging.getLogger(__name__)

ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class OrderService:
    """Service for placing and reading orders."""

    def __init__(
        self,
        order_repo: OrderRepository | None = None,
        product_repo: ProductRepository | None = None,
        user_repo: UserRepository | None = None,
        ledger: ProductLedger | None = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.product_repo = product_repo or ProductRepository()
        self.user_repo = user_repo or UserRepository()
        self.ledger = ledger or ProductLedger(self.product_repo)

    def place_order(
        self,
        user_id: UUID,
        shipping: ShippingInfo,
        payment_method: str,
        line_items: list[LineItemRequest],
    ) -> Order:
        """
        Place an order for a cart of (product, quantity) lines.

        Header, items and stock decrements share one transaction on the
        default store: any failure rolls all of them back, including stock
        already taken for earlier lines.
        """
        if not line_items:
            raise InvalidInput("Order must contain at least one line item")
        for line in line_items:
            line.validate()

        try:
            order = self._place(user_id, shipping, payment_method, line_items)
        except Exception as e:
            logger.warning(
                "order_placement_failed",
                extra={
                    "user_id": str(user_id),
                    "error": str(e),
                },
            )
            raise

        logger.info(
            "order_placed",
            extra={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "user_id": str(user_id),
                "total_amount": str(order.total_amount),
                "items_count": len(order.items),
            },
        )
        return order

    @transaction.atomic
    def _place(
        self,
        user_id: UUID,
        shipping: ShippingInfo,
        payment_method: str,
        line_items: list[LineItemRequest],
    ) -> Order:
        if not self.user_repo.exists(user_id):
            raise NotFound(f"User {user_id} not found")

        # Lock every product up front so concurrent placements serialize per product.
        products = self.product_repo.lock_many([line.product_id for line in line_items])
        for line in line_items:
            if line.product_id not in products:
                raise NotFound(f"Product {line.product_id} not found")

        order = Order(
            order_number=self._generate_order_number(),
            user_id=user_id,
            shipping=shipping,
            payment_method=payment_method,
            order_date=timezone.now(),
        )
        try:
            self.order_repo.save(order)
        except IntegrityError as e:
            raise Conflict(f"Order number {order.order_number} is already taken") from e

        for position, line in enumerate(line_items):
            product = products[line.product_id]
            if product.stock_quantity < line.quantity:
                raise Conflict(
                    f"Insufficient stock for product {product.id}: "
                    f"available {product.stock_quantity}, requested {line.quantity}"
                )
            item = OrderItem(
                product_id=product.id,
                quantity=line.quantity,
                unit_price=product.effective_price,
                discount_amount=line.discount_amount,
            )
            self.order_repo.add_item(order.id, item, position)
            order.add_item(item)
            # Keep the local copy in step for repeated lines of the same product.
            products[product.id] = self.ledger.adjust_stock(product.id, -line.quantity)

        order.finalize_total()
        self.order_repo.save(order)
        return order

    def _generate_order_number(self) -> str:
        """Random prefixed number, re-drawn while it collides with a stored one."""
        prefix = getattr(settings, "ORDER_NUMBER_PREFIX", "UF")
        length = getattr(settings, "ORDER_NUMBER_LENGTH", 8)
        attempts = getattr(settings, "ORDER_NUMBER_ATTEMPTS", 5)
        for _ in range(attempts):
            suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(length))
            order_number = f"{prefix}-{suffix}"
            if not self.order_repo.number_exists(order_number):
                return order_number
        raise Conflict("Could not generate a unique order number")

    @transaction.atomic
    def update_shipping_info(self, order_id: UUID, tracking_number: str, carrier: str) -> Order:
        """Record tracking data; does not touch the order status."""
        order = self.order_repo.get_by_id(order_id, for_update=True)
        if order is None:
            raise NotFound(f"Order {order_id} not found")
        order.tracking_number = tracking_number
        order.shipping_carrier = carrier
        return self.order_repo.save(order)

    def get_order(self, order_id: UUID) -> Order:
        """Get order by ID."""
        order = self.order_repo.get_by_id(order_id)
        if order is None:
            raise NotFound(f"Order {order_id} not found")
        return order

    def get_order_by_number(self, order_number: str) -> Order:
        order = self.order_repo.get_by_number(order_number)
        if order is None:
            raise NotFound(f"Order {order_number} not found")
        return order

    def get_order_items(self, order_id: UUID) -> list[OrderItem]:
        return self.get_order(order_id).items

    def get_orders_by_user(self, user_id: UUID, limit: int = 50, offset: int = 0) -> list[Order]:
        """Get orders by user with pagination."""
        if not self.user_repo.exists(user_id):
            raise NotFound(f"User {user_id} not found")
        return self.order_repo.get_by_user(user_id, limit=limit, offset=offset)
