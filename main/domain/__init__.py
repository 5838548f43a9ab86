from main.domain.order import Order, OrderItem, OrderStatus, PaymentStatus
from main.domain.product import Product
from main.domain.review import Review

__all__ = ["Order", "OrderItem", "OrderStatus", "PaymentStatus", "Product", "Review"]
