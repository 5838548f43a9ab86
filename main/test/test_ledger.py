"""
Tests for product ledger invariants.
"""
from decimal import Decimal
from uuid import uuid4

from django.test import TestCase

from main.domain.errors import InvalidInput, NotFound
from main.infra.repositories import ProductRepository
from main.services import ProductLedger
from main.test.base import MarketplaceTestMixin


class ProductLedgerTest(MarketplaceTestMixin, TestCase):
    """Tests for stock adjustment and rating writes."""

    def setUp(self):
        self.ledger = ProductLedger()
        self.product = self.create_product(stock=3)

    def test_consume_and_restore(self):
        self.ledger.adjust_stock(self.product.id, -2)
        self.assertEqual(self.stock_of(self.product.id), 1)
        self.ledger.adjust_stock(self.product.id, 2)
        self.assertEqual(self.stock_of(self.product.id), 3)

    def test_stock_never_goes_negative_and_warns(self):
        with self.assertLogs("main.services.ledger", level="WARNING") as logs:
            product = self.ledger.adjust_stock(self.product.id, -5)
        self.assertEqual(product.stock_quantity, 0)
        self.assertFalse(product.is_available)
        self.assertIn("stock_clamped_to_zero", logs.output[0])

        stored = ProductRepository().get_by_id(self.product.id)
        self.assertEqual(stored.stock_quantity, 0)
        self.assertFalse(stored.is_available)

    def test_restoring_stock_keeps_product_disabled(self):
        self.ledger.adjust_stock(self.product.id, -3)
        product = self.ledger.adjust_stock(self.product.id, 5)
        self.assertEqual(product.stock_quantity, 5)
        self.assertFalse(product.is_available)

    def test_manual_re_enable(self):
        self.ledger.adjust_stock(self.product.id, -3)
        with self.assertRaises(InvalidInput):
            self.ledger.set_availability(self.product.id, True)

        self.ledger.adjust_stock(self.product.id, 1)
        product = self.ledger.set_availability(self.product.id, True)
        self.assertTrue(product.is_available)
        self.assertTrue(ProductRepository().get_by_id(self.product.id).is_available)

    def test_missing_product(self):
        with self.assertRaises(NotFound):
            self.ledger.adjust_stock(uuid4(), 1)
        with self.assertRaises(NotFound):
            self.ledger.set_average_rating(uuid4(), Decimal("4.00"))

    def test_set_average_rating_overwrites(self):
        product = self.ledger.set_average_rating(self.product.id, Decimal("3.25"))
        self.assertEqual(product.average_rating, Decimal("3.25"))
        self.assertEqual(product.stock_quantity, 3)
