"""
Expose ORM models for Django's auto-discovery while keeping real definitions
under the infrastructure module.
"""

from main.infra.models import (  # noqa: F401
    IdempotencyKey,
    OrderItemORM,
    OrderORM,
    ProductORM,
    ReviewORM,
    UserORM,
)
