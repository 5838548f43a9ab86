"""
Transaction-scoped locks using PostgreSQL advisory locks.
"""
from contextlib import contextmanager
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS, connections


@contextmanager
def advisory_lock(key: str, using: str = DEFAULT_DB_ALIAS):
    """
    Acquire an advisory lock for the rest of the current transaction.

    Must run inside ``transaction.atomic(using=using)``; the lock is
    released when that transaction ends. On SQLite nothing is taken here:
    the settings open every transaction with BEGIN IMMEDIATE, which holds
    the database write lock for the whole atomic block.

    Usage:
        with transaction.atomic(), advisory_lock("rating:<id>"):
            ...
    """
    connection = connections[using]
    if connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT pg_advisory_xact_lock(hashtext(%s)::bigint)",
                [key],
            )
    yield


def rating_lock(product_id: UUID):
    """Serialize rating recomputations for one product."""
    return advisory_lock(f"rating:{product_id}")
