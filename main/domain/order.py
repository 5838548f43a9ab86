"""
Domain model for Order aggregate and its status machine.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from main.domain.errors import InvalidInput, InvalidTransition

CENT = Decimal("0.01")


class OrderStatus(str, Enum):
    """Order fulfilment status."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    """Payment status, independent from the fulfilment status."""
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}


def parse_order_status(value: str | OrderStatus) -> OrderStatus:
    """Parse order status name."""
    try:
        return OrderStatus(str(value.value if isinstance(value, Enum) else value).upper())
    except ValueError:
        raise InvalidInput(f"Unknown order status: {value}") from None


def parse_payment_status(value: str | PaymentStatus) -> PaymentStatus:
    """Parse payment status name."""
    try:
        return PaymentStatus(str(value.value if isinstance(value, Enum) else value).upper())
    except ValueError:
        raise InvalidInput(f"Unknown payment status: {value}") from None


@dataclass(frozen=True)
class ShippingInfo:
    """Shipping destination captured at placement."""
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    method: str = ""


@dataclass(frozen=True)
class LineItemRequest:
    """One (product, quantity) entry of a cart submitted for placement."""
    product_id: UUID
    quantity: int
    discount_amount: Decimal = Decimal("0.00")

    def validate(self) -> None:
        """Reject non-positive quantities and negative or sub-cent discounts."""
        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise InvalidInput(f"Quantity for product {self.product_id} must be positive")
        if not self.discount_amount.is_finite() or self.discount_amount < 0:
            raise InvalidInput(f"Discount for product {self.product_id} must be a non-negative amount")
        # Stored amounts have two decimal places.
        if self.discount_amount != self.discount_amount.quantize(CENT):
            raise InvalidInput(f"Discount for product {self.product_id} must be a whole number of cents")


class OrderItem:
    """Order line item; price fields are a snapshot taken at placement."""

    def __init__(
        self,
        product_id: UUID,
        quantity: int,
        unit_price: Decimal,
        discount_amount: Decimal = Decimal("0.00"),
        id: UUID | None = None,
    ):
        if quantity <= 0:
            raise InvalidInput("Quantity must be positive")
        if unit_price < 0:
            raise InvalidInput("Unit price must be non-negative")
        if discount_amount < 0 or discount_amount > unit_price * quantity:
            raise InvalidInput("Discount must be between zero and the line amount")

        self.id = id or uuid4()
        self.product_id = product_id
        self.quantity = quantity
        self.unit_price = unit_price
        self.discount_amount = discount_amount

    @property
    def subtotal(self) -> Decimal:
        """Calculate item subtotal."""
        return self.unit_price * self.quantity - self.discount_amount


class Order:
    """Order aggregate root."""

    def __init__(
        self,
        id: UUID | None = None,
        order_number: str = "",
        user_id: UUID | None = None,
        shipping: ShippingInfo | None = None,
        payment_method: str = "",
        items: list[OrderItem] | None = None,
        order_status: OrderStatus = OrderStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        order_date: datetime | None = None,
        total_amount: Decimal = Decimal("0.00"),
        tracking_number: str = "",
        shipping_carrier: str = "",
    ):
        self.id = id or uuid4()
        self.order_number = order_number
        self.user_id = user_id
        self.shipping = shipping
        self.payment_method = payment_method
        self.order_date = order_date
        self.tracking_number = tracking_number
        self.shipping_carrier = shipping_carrier
        self._items = items or []
        self._order_status = order_status
        self._payment_status = payment_status
        self._total_amount = total_amount

    @property
    def items(self) -> list[OrderItem]:
        """Get order items (immutable)."""
        return list(self._items)

    @property
    def order_status(self) -> OrderStatus:
        return self._order_status

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def total_amount(self) -> Decimal:
        """Total frozen at placement."""
        return self._total_amount

    def add_item(self, item: OrderItem) -> None:
        """Attach a line item while the order is being placed."""
        if self._order_status != OrderStatus.PENDING:
            raise InvalidTransition("Can only add items to pending orders")
        self._items.append(item)

    def finalize_total(self) -> Decimal:
        """Freeze the total as the sum of line subtotals."""
        self._total_amount = sum((item.subtotal for item in self._items), Decimal("0.00"))
        return self._total_amount

    def transition_to(self, new_status: OrderStatus) -> bool:
        """
        Move to new_status following ORDER_TRANSITIONS.

        Returns True when the transition is a cancellation, i.e. when the
        caller must restore the stock consumed by this order.
        """
        if self._order_status == OrderStatus.CANCELLED:
            raise InvalidTransition(f"Order {self.order_number or self.id} is already cancelled")
        if new_status not in ORDER_TRANSITIONS[self._order_status]:
            raise InvalidTransition(
                f"Cannot move order from {self._order_status.value} to {new_status.value}"
            )
        self._order_status = new_status
        return new_status == OrderStatus.CANCELLED

    def set_payment_status(self, new_status: PaymentStatus) -> None:
        """Move payment status following PAYMENT_TRANSITIONS."""
        if new_status not in PAYMENT_TRANSITIONS[self._payment_status]:
            raise InvalidTransition(
                f"Cannot move payment from {self._payment_status.value} to {new_status.value}"
            )
        self._payment_status = new_status
