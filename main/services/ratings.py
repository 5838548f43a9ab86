"""
Rating aggregation and the review lifecycle that drives it.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from django.conf import settings
from django.db import transaction

from main.domain.errors import NotFound
from main.domain.product import Product
from main.domain.review import Review
from main.infra.locks import rating_lock
from main.infra.repositories import ProductRepository, ReviewRepository, UserRepository
from main.services.ledger import ProductLedger


logger = logging.getLogger(__name__)


def quantize_rating(value: Decimal) -> Decimal:
    places = getattr(settings, "RATING_DECIMAL_PLACES", 2)
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class RatingAggregator:
    """Keeps Product.average_rating equal to the mean of its stored reviews."""

    def __init__(
        self,
        review_repo: ReviewRepository | None = None,
        ledger: ProductLedger | None = None,
    ):
        self.review_repo = review_repo or ReviewRepository()
        self.ledger = ledger or ProductLedger()

    def recompute_rating(self, product_id: UUID) -> Product:
        """
        Recompute from the full current review set, never from deltas.

        Runs under a per-product lock and reads the review aggregate inside
        it: whichever recomputation commits last has seen every review
        mutation that finished before it started, so out-of-order triggers
        converge to the exact mean.
        """
        with transaction.atomic(), rating_lock(product_id):
            count = self.review_repo.count_by_product(product_id)
            if count == 0:
                average = Decimal("0")
            else:
                average = self.review_repo.average_rating_by_product(product_id) or Decimal("0")
            average = quantize_rating(average)
            product = self.ledger.set_average_rating(product_id, average)

        logger.info(
            "rating_recomputed",
            extra={
                "product_id": str(product_id),
                "review_count": count,
                "average_rating": str(average),
            },
        )
        return product


class ReviewService:
    """Service for review mutations; each one triggers a rating recomputation."""

    def __init__(
        self,
        review_repo: ReviewRepository | None = None,
        product_repo: ProductRepository | None = None,
        user_repo: UserRepository | None = None,
        aggregator: RatingAggregator | None = None,
    ):
        self.review_repo = review_repo or ReviewRepository()
        self.product_repo = product_repo or ProductRepository()
        self.user_repo = user_repo or UserRepository()
        self.aggregator = aggregator or RatingAggregator(self.review_repo)

    def create_review(
        self,
        user_id: UUID,
        product_id: UUID,
        rating: int,
        title: str = "",
        comment: str = "",
        pros: str = "",
        cons: str = "",
        images: list[str] | None = None,
        is_verified_purchase: bool = False,
    ) -> Review:
        """Create review and refresh the product rating."""
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        if self.product_repo.get_by_id(product_id) is None:
            raise NotFound(f"Product {product_id} not found")

        review = Review(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            username=f"{user.first_name} {user.last_name}".strip(),
            title=title,
            comment=comment,
            pros=pros,
            cons=cons,
            images=images,
            is_verified_purchase=is_verified_purchase,
        )
        self.review_repo.save(review)
        self.aggregator.recompute_rating(product_id)
        return review

    def update_review(
        self,
        review_id: UUID,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
        pros: str | None = None,
        cons: str | None = None,
        images: list[str] | None = None,
    ) -> Review:
        """Update provided fields and refresh the product rating."""
        review = self.get_review(review_id)
        review.apply_changes(
            rating=rating,
            title=title,
            comment=comment,
            pros=pros,
            cons=cons,
            images=images,
        )
        self.review_repo.save(review)
        self.aggregator.recompute_rating(review.product_id)
        return review

    def delete_review(self, review_id: UUID) -> None:
        """Delete review and refresh the product rating."""
        review = self.get_review(review_id)
        self.review_repo.delete(review_id)
        self.aggregator.recompute_rating(review.product_id)

    def get_review(self, review_id: UUID) -> Review:
        review = self.review_repo.get_by_id(review_id)
        if review is None:
            raise NotFound(f"Review {review_id} not found")
        return review

    def get_reviews_by_product(self, product_id: UUID) -> list[Review]:
        if self.product_repo.get_by_id(product_id) is None:
            raise NotFound(f"Product {product_id} not found")
        return self.review_repo.list_by_product(product_id)

    def get_reviews_by_user(self, user_id: UUID) -> list[Review]:
        if not self.user_repo.exists(user_id):
            raise NotFound(f"User {user_id} not found")
        return self.review_repo.list_by_user(user_id)
