"""
Domain errors shared by all marketplace services.
"""


class MarketplaceError(Exception):
    """Base error for marketplace operations."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotFound(MarketplaceError):
    """Referenced user, product, order or review does not exist."""

    code = "NOT_FOUND"


class InvalidInput(MarketplaceError):
    """Request data is malformed (bad quantity, unknown status, ...)."""

    code = "VALIDATION_ERROR"


class InvalidTransition(MarketplaceError):
    """Order or payment status change not allowed from the current state."""

    code = "INVALID_STATE"


class Conflict(MarketplaceError):
    """Operation lost a race (order number collision, stock exhausted)."""

    code = "CONFLICT"
