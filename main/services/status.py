"""
Order status machine with compensating stock restoration on cancellation.
"""
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction

from main.domain.errors import NotFound
from main.domain.order import (
    Order,
    OrderStatus,
    PaymentStatus,
    parse_order_status,
    parse_payment_status,
)
from main.infra.repositories import OrderRepository
from main.services.ledger import ProductLedger


logger = logging.getLogger(__name__)


class OrderStatusService:
    """Service for order and payment status transitions."""

    def __init__(
        self,
        order_repo: OrderRepository | None = None,
        ledger: ProductLedger | None = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.ledger = ledger or ProductLedger()

    @transaction.atomic
    def set_order_status(self, order_id: UUID, new_status: str | OrderStatus) -> Order:
        """
        Move an order to new_status.

        The order row stays locked until commit, so a retried cancellation
        waits for the first one and then sees CANCELLED, which is rejected
        with InvalidTransition instead of restoring stock twice.
        """
        target = parse_order_status(new_status)
        order = self.order_repo.get_by_id(order_id, for_update=True)
        if order is None:
            raise NotFound(f"Order {order_id} not found")

        previous_status = order.order_status
        restore_stock = order.transition_to(target)
        if restore_stock:
            for item in self.order_repo.list_items_by_order(order.id):
                self.ledger.adjust_stock(item.product_id, item.quantity)
            logger.info(
                "order_stock_restored",
                extra={
                    "order_id": str(order.id),
                    "order_number": order.order_number,
                    "items_count": len(order.items),
                },
            )

        self.order_repo.save(order)
        logger.info(
            "order_status_changed",
            extra={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "previous_status": previous_status.value,
                "status": order.order_status.value,
            },
        )
        return order

    def cancel_order(self, order_id: UUID) -> Order:
        """Cancel order (compensate the stock reservation)."""
        return self.set_order_status(order_id, OrderStatus.CANCELLED)

    @transaction.atomic
    def set_payment_status(self, order_id: UUID, new_status: str | PaymentStatus) -> Order:
        """Move the payment status; no inventory side effects."""
        target = parse_payment_status(new_status)
        order = self.order_repo.get_by_id(order_id, for_update=True)
        if order is None:
            raise NotFound(f"Order {order_id} not found")

        previous_status = order.payment_status
        order.set_payment_status(target)
        self.order_repo.save(order)
        logger.info(
            "payment_status_changed",
            extra={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "previous_status": previous_status.value,
                "status": order.payment_status.value,
            },
        )
        return order
