from main.services.ledger import ProductLedger
from main.services.ordering import OrderService
from main.services.ratings import RatingAggregator, ReviewService
from main.services.status import OrderStatusService

__all__ = [
    "OrderService",
    "OrderStatusService",
    "ProductLedger",
    "RatingAggregator",
    "ReviewService",
]
