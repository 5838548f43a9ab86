"""
Unit tests for domain models.
"""
from decimal import Decimal
from uuid import uuid4

from django.test import SimpleTestCase

from main.domain.errors import InvalidInput, InvalidTransition
from main.domain.order import (
    LineItemRequest,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    parse_order_status,
    parse_payment_status,
)
from main.domain.product import Product
from main.domain.review import Review


class ProductTest(SimpleTestCase):
    """Tests for Product ledger rules."""

    def test_effective_price_uses_active_sale_price(self):
        product = Product(price=Decimal("10.00"), sale_price=Decimal("8.00"), stock_quantity=1)
        self.assertEqual(product.effective_price, Decimal("8.00"))

    def test_effective_price_ignores_zero_sale_price(self):
        product = Product(price=Decimal("10.00"), sale_price=Decimal("0.00"), stock_quantity=1)
        self.assertEqual(product.effective_price, Decimal("10.00"))

    def test_effective_price_without_sale_price(self):
        product = Product(price=Decimal("5.00"), stock_quantity=1)
        self.assertEqual(product.effective_price, Decimal("5.00"))

    def test_sale_price_must_be_below_price(self):
        with self.assertRaises(InvalidInput):
            Product(price=Decimal("10.00"), sale_price=Decimal("10.00"))

    def test_price_must_be_positive(self):
        with self.assertRaises(InvalidInput):
            Product(price=Decimal("0.00"))

    def test_adjust_stock_floors_at_zero(self):
        product = Product(price=Decimal("5.00"), stock_quantity=3)
        clamped = product.adjust_stock(-5)
        self.assertTrue(clamped)
        self.assertEqual(product.stock_quantity, 0)
        self.assertFalse(product.is_available)

    def test_adjust_stock_to_exactly_zero_is_not_a_clamp(self):
        product = Product(price=Decimal("5.00"), stock_quantity=3)
        self.assertFalse(product.adjust_stock(-3))
        self.assertEqual(product.stock_quantity, 0)
        self.assertFalse(product.is_available)

    def test_restock_does_not_re_enable(self):
        product = Product(price=Decimal("5.00"), stock_quantity=1)
        product.adjust_stock(-1)
        product.adjust_stock(4)
        self.assertEqual(product.stock_quantity, 4)
        self.assertFalse(product.is_available)

    def test_cannot_enable_product_without_stock(self):
        product = Product(price=Decimal("5.00"), stock_quantity=0)
        with self.assertRaises(InvalidInput):
            product.set_availability(True)


class OrderItemTest(SimpleTestCase):
    """Tests for OrderItem snapshot."""

    def test_subtotal(self):
        item = OrderItem(product_id=uuid4(), quantity=3, unit_price=Decimal("5.00"))
        self.assertEqual(item.subtotal, Decimal("15.00"))

    def test_subtotal_with_discount(self):
        item = OrderItem(
            product_id=uuid4(),
            quantity=2,
            unit_price=Decimal("4.99"),
            discount_amount=Decimal("0.98"),
        )
        self.assertEqual(item.subtotal, Decimal("9.00"))

    def test_non_positive_quantity_fails(self):
        with self.assertRaises(InvalidInput):
            OrderItem(product_id=uuid4(), quantity=0, unit_price=Decimal("1.00"))

    def test_discount_larger_than_line_fails(self):
        with self.assertRaises(InvalidInput):
            OrderItem(
                product_id=uuid4(),
                quantity=1,
                unit_price=Decimal("1.00"),
                discount_amount=Decimal("1.01"),
            )

    def test_line_item_request_validation(self):
        with self.assertRaises(InvalidInput):
            LineItemRequest(product_id=uuid4(), quantity=-2).validate()
        for discount in ("-0.01", "0.005", "NaN"):
            with self.assertRaises(InvalidInput):
                LineItemRequest(product_id=uuid4(), quantity=1, discount_amount=Decimal(discount)).validate()
        LineItemRequest(product_id=uuid4(), quantity=1, discount_amount=Decimal("0.250")).validate()
        LineItemRequest(product_id=uuid4(), quantity=2).validate()


class OrderTest(SimpleTestCase):
    """Tests for Order aggregate and status machine."""

    def _order(self) -> Order:
        order = Order(user_id=uuid4(), order_number="UF-TEST0001")
        order.add_item(OrderItem(uuid4(), 3, Decimal("5.00")))
        order.add_item(OrderItem(uuid4(), 1, Decimal("0.10")))
        return order

    def test_new_order_is_pending(self):
        order = Order(user_id=uuid4())
        self.assertEqual(order.order_status, OrderStatus.PENDING)
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)
        self.assertEqual(order.total_amount, Decimal("0.00"))

    def test_finalize_total_sums_subtotals_exactly(self):
        order = self._order()
        self.assertEqual(order.finalize_total(), Decimal("15.10"))
        self.assertEqual(order.total_amount, sum(item.subtotal for item in order.items))

    def test_forward_path(self):
        order = self._order()
        for status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            self.assertFalse(order.transition_to(status))
        self.assertEqual(order.order_status, OrderStatus.DELIVERED)

    def test_cannot_skip_states(self):
        order = self._order()
        with self.assertRaises(InvalidTransition):
            order.transition_to(OrderStatus.SHIPPED)

    def test_cancel_from_pending_and_processing(self):
        order = self._order()
        self.assertTrue(order.transition_to(OrderStatus.CANCELLED))

        order = self._order()
        order.transition_to(OrderStatus.PROCESSING)
        self.assertTrue(order.transition_to(OrderStatus.CANCELLED))

    def test_cannot_cancel_shipped_order(self):
        order = self._order()
        order.transition_to(OrderStatus.PROCESSING)
        order.transition_to(OrderStatus.SHIPPED)
        with self.assertRaises(InvalidTransition):
            order.transition_to(OrderStatus.CANCELLED)

    def test_cancelled_is_terminal(self):
        order = self._order()
        order.transition_to(OrderStatus.CANCELLED)
        for status in OrderStatus:
            with self.assertRaises(InvalidTransition):
                order.transition_to(status)

    def test_cannot_add_items_after_status_change(self):
        order = self._order()
        order.transition_to(OrderStatus.PROCESSING)
        with self.assertRaises(InvalidTransition):
            order.add_item(OrderItem(uuid4(), 1, Decimal("1.00")))

    def test_payment_transitions(self):
        order = self._order()
        order.set_payment_status(PaymentStatus.PAID)
        order.set_payment_status(PaymentStatus.REFUNDED)
        self.assertEqual(order.payment_status, PaymentStatus.REFUNDED)

        order = self._order()
        with self.assertRaises(InvalidTransition):
            order.set_payment_status(PaymentStatus.REFUNDED)

    def test_payment_status_is_independent(self):
        order = self._order()
        order.transition_to(OrderStatus.CANCELLED)
        order.set_payment_status(PaymentStatus.FAILED)
        self.assertEqual(order.payment_status, PaymentStatus.FAILED)

    def test_parse_status(self):
        self.assertEqual(parse_order_status("shipped"), OrderStatus.SHIPPED)
        self.assertEqual(parse_payment_status(PaymentStatus.PAID), PaymentStatus.PAID)
        with self.assertRaises(InvalidInput):
            parse_order_status("LOST")
        with self.assertRaises(InvalidInput):
            parse_payment_status("")


class ReviewTest(SimpleTestCase):
    """Tests for Review validation."""

    def test_rating_range(self):
        for rating in (0, 6, 3.5, True):
            with self.assertRaises(InvalidInput):
                Review(product_id=uuid4(), user_id=uuid4(), rating=rating)

    def test_apply_changes_only_touches_given_fields(self):
        review = Review(product_id=uuid4(), user_id=uuid4(), rating=4, title="Fresh", comment="Good", pros="Crunchy")
        review.apply_changes(rating=2, cons="Bruised")
        self.assertEqual(review.rating, 2)
        self.assertEqual(review.title, "Fresh")
        self.assertEqual(review.comment, "Good")
        self.assertEqual(review.pros, "Crunchy")
        self.assertEqual(review.cons, "Bruised")
