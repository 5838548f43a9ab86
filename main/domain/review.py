"""
Domain model for product reviews.
"""
from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from main.domain.errors import InvalidInput

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInput(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
    return rating


class Review:
    """User review of a product, kept in the review store."""

    def __init__(
        self,
        product_id: UUID,
        user_id: UUID,
        rating: int,
        id: UUID | None = None,
        username: str = "",
        title: str = "",
        comment: str = "",
        pros: str = "",
        cons: str = "",
        images: list[str] | None = None,
        is_verified_purchase: bool = False,
        helpful_votes: int = 0,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = id or uuid4()
        self.product_id = product_id
        self.user_id = user_id
        self.rating = validate_rating(rating)
        self.username = username
        self.title = title
        self.comment = comment
        self.pros = pros
        self.cons = cons
        self.images = list(images or [])
        self.is_verified_purchase = is_verified_purchase
        self.helpful_votes = helpful_votes
        self.created_at = created_at
        self.updated_at = updated_at

    def apply_changes(
        self,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
        pros: str | None = None,
        cons: str | None = None,
        images: list[str] | None = None,
    ) -> None:
        """Update only the fields that were provided."""
        if rating is not None:
            self.rating = validate_rating(rating)
        if title is not None:
            self.title = title
        if comment is not None:
            self.comment = comment
        if pros is not None:
            self.pros = pros
        if cons is not None:
            self.cons = cons
        if images is not None:
            self.images = list(images)
