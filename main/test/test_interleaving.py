"""
Forced interleavings of ledger and rating writers.

One worker is paused right after its locked read; a second worker then runs
the same operation. The second one must wait for the first to commit, on
every configured backend.
"""
import threading
from decimal import Decimal
from unittest.mock import patch

from django.db import connections
from django.test import TransactionTestCase

from main.infra.models import ReviewORM
from main.infra.repositories import ProductRepository, ReviewRepository
from main.services import ProductLedger, RatingAggregator, ReviewService
from main.test.base import MarketplaceTestMixin

PAUSED = "paused-worker"
WAIT = 5


class InterleavingTest(MarketplaceTestMixin, TransactionTestCase):
    """A paused locked read blocks concurrent writers until it commits."""

    def setUp(self):
        self.read_done = threading.Event()
        self.release = threading.Event()
        self.errors = []

    def pause_after(self, original):
        """Wrap a repository method so the paused worker stops after calling it."""

        def wrapper(*args, **kwargs):
            result = original(*args, **kwargs)
            if threading.current_thread().name == PAUSED:
                self.read_done.set()
                self.release.wait(WAIT)
            return result

        return wrapper

    def start(self, target, name=None):
        def run():
            try:
                target()
            except Exception as e:
                self.errors.append(e)
            finally:
                connections.close_all()

        thread = threading.Thread(target=run, name=name)
        thread.start()
        return thread

    def interleave(self, first, second):
        """Run first until it pauses, then second; second must block on first."""
        paused = self.start(first, name=PAUSED)
        self.assertTrue(self.read_done.wait(WAIT))

        waiting = self.start(second)
        waiting.join(0.5)
        blocked = waiting.is_alive()

        self.release.set()
        paused.join(WAIT)
        waiting.join(WAIT)
        self.assertEqual(self.errors, [])
        self.assertTrue(blocked, "second writer did not wait for the first one")

    def test_stock_adjustments_serialize(self):
        product = self.create_product(stock=10)
        ledger = ProductLedger()

        with patch.object(
            ProductRepository,
            "get_by_id",
            autospec=True,
            side_effect=self.pause_after(ProductRepository.get_by_id),
        ):
            self.interleave(
                lambda: ledger.adjust_stock(product.id, -3),
                lambda: ledger.adjust_stock(product.id, -2),
            )

        self.assertEqual(self.stock_of(product.id), 5)

    def test_stale_rating_recompute_cannot_win(self):
        user_id = self.create_user()
        product = self.create_product()
        ReviewORM.objects.create(product_id=product.id, user_id=user_id, rating=5)

        with patch.object(
            ReviewRepository,
            "average_rating_by_product",
            autospec=True,
            side_effect=self.pause_after(ReviewRepository.average_rating_by_product),
        ):
            self.interleave(
                lambda: RatingAggregator().recompute_rating(product.id),
                lambda: ReviewService().create_review(user_id, product.id, 1),
            )

        self.assertEqual(ProductRepository().get_by_id(product.id).average_rating, Decimal("3.00"))
