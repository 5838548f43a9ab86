"""
Database router keeping reviews in their own store.
"""
from django.conf import settings

REVIEWS_DB = getattr(settings, "REVIEWS_DB_ALIAS", "reviews")


class ReviewStoreRouter:
    """Send review models to the review database, everything else to default."""

    review_models = {"revieworm"}

    def _is_review_model(self, model) -> bool:
        return model._meta.app_label == "main" and model._meta.model_name in self.review_models

    def db_for_read(self, model, **hints):
        if self._is_review_model(model):
            return REVIEWS_DB
        return None

    def db_for_write(self, model, **hints):
        if self._is_review_model(model):
            return REVIEWS_DB
        return None

    def allow_relation(self, obj1, obj2, **hints):
        # Reviews only reference products and users by id.
        if self._is_review_model(obj1) or self._is_review_model(obj2):
            return False
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        is_review = app_label == "main" and model_name in self.review_models
        if db == REVIEWS_DB:
            return is_review
        if is_review:
            return False
        return None
