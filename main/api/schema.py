"""
GraphQL schema definition using Ariadne.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from uuid import UUID

from ariadne import (
    MutationType,
    ObjectType,
    QueryType,
    ScalarType,
    load_schema_from_path,
    make_executable_schema,
)

from main.domain.order import LineItemRequest, ShippingInfo
from main.services import (
    OrderService,
    OrderStatusService,
    ProductLedger,
    RatingAggregator,
    ReviewService,
)

# Load schema from .graphql files
SCHEMAS_DIR = Path(__file__).parent / "schemas"
type_defs = "\n".join([
    load_schema_from_path(SCHEMAS_DIR / "common"),
    load_schema_from_path(SCHEMAS_DIR / "query"),
    load_schema_from_path(SCHEMAS_DIR / "mutation"),
])

query = QueryType()
mutation = MutationType()
order = ObjectType("Order")


# Queries

@query.field("product")
def resolve_product(_, info, id):
    return ProductLedger().get_product(id)


@query.field("order")
def resolve_order(_, info, id):
    return OrderService().get_order(id)


@query.field("orderByNumber")
def resolve_order_by_number(_, info, order_number):
    return OrderService().get_order_by_number(order_number)


@query.field("ordersByUser")
def resolve_orders_by_user(_, info, user_id, limit=50, offset=0):
    """Resolve orders by user query with pagination."""
    return OrderService().get_orders_by_user(user_id, limit=limit, offset=offset)


@query.field("review")
def resolve_review(_, info, id):
    return ReviewService().get_review(id)


@query.field("reviewsByProduct")
def resolve_reviews_by_product(_, info, product_id):
    return ReviewService().get_reviews_by_product(product_id)


@query.field("reviewsByUser")
def resolve_reviews_by_user(_, info, user_id):
    return ReviewService().get_reviews_by_user(user_id)


# Mutations

@mutation.field("placeOrder")
def resolve_place_order(_, info, input: dict):
    """Resolve place order mutation."""
    shipping_input = input["shipping"]
    shipping = ShippingInfo(
        address=shipping_input["address"],
        city=shipping_input["city"],
        state=shipping_input["state"],
        zip_code=shipping_input["zip_code"],
        country=shipping_input["country"],
        method=shipping_input.get("method") or "",
    )
    line_items = [
        LineItemRequest(
            product_id=item["product_id"],
            quantity=item["quantity"],
            discount_amount=item.get("discount_amount") or Decimal("0.00"),
        )
        for item in input["items"]
    ]
    return OrderService().place_order(
        user_id=input["user_id"],
        shipping=shipping,
        payment_method=input["payment_method"],
        line_items=line_items,
    )


@mutation.field("setOrderStatus")
def resolve_set_order_status(_, info, order_id, status):
    return OrderStatusService().set_order_status(order_id, status)


@mutation.field("setPaymentStatus")
def resolve_set_payment_status(_, info, order_id, status):
    return OrderStatusService().set_payment_status(order_id, status)


@mutation.field("updateShippingInfo")
def resolve_update_shipping_info(_, info, order_id, tracking_number, carrier):
    return OrderService().update_shipping_info(order_id, tracking_number, carrier)


@mutation.field("adjustStock")
def resolve_adjust_stock(_, info, product_id, delta):
    return ProductLedger().adjust_stock(product_id, delta)


@mutation.field("setProductAvailability")
def resolve_set_product_availability(_, info, product_id, is_available):
    return ProductLedger().set_availability(product_id, is_available)


@mutation.field("recomputeRating")
def resolve_recompute_rating(_, info, product_id):
    return RatingAggregator().recompute_rating(product_id)


@mutation.field("createReview")
def resolve_create_review(_, info, input: dict):
    return ReviewService().create_review(
        user_id=input["user_id"],
        product_id=input["product_id"],
        rating=input["rating"],
        title=input.get("title") or "",
        comment=input.get("comment") or "",
        pros=input.get("pros") or "",
        cons=input.get("cons") or "",
        images=input.get("images"),
        is_verified_purchase=bool(input.get("is_verified_purchase")),
    )


@mutation.field("updateReview")
def resolve_update_review(_, info, id, input: dict):
    return ReviewService().update_review(
        id,
        rating=input.get("rating"),
        title=input.get("title"),
        comment=input.get("comment"),
        pros=input.get("pros"),
        cons=input.get("cons"),
        images=input.get("images"),
    )


@mutation.field("deleteReview")
def resolve_delete_review(_, info, id):
    ReviewService().delete_review(id)
    return True


@order.field("orderStatus")
def resolve_order_status(order_obj, info):
    return order_obj.order_status.value


@order.field("paymentStatus")
def resolve_payment_status(order_obj, info):
    return order_obj.payment_status.value


# Define custom scalars
decimal_scalar = ScalarType("Decimal")
uuid_scalar = ScalarType("UUID")
datetime_scalar = ScalarType("DateTime")


@decimal_scalar.serializer
def serialize_decimal(value):
    """Serialize Decimal to string."""
    return str(value)


@decimal_scalar.value_parser
def parse_decimal_value(value):
    """Parse Decimal from string or number."""
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid decimal: {value}") from None


@uuid_scalar.serializer
def serialize_uuid(value):
    """Serialize UUID to string."""
    return str(value)


@uuid_scalar.value_parser
def parse_uuid_value(value):
    """Parse UUID from string."""
    if isinstance(value, UUID):
        return value
    return UUID(str(value))


@datetime_scalar.serializer
def serialize_datetime(value):
    """Serialize DateTime to ISO format string."""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


@datetime_scalar.value_parser
def parse_datetime_value(value):
    """Parse DateTime from ISO string."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


# Create executable schema
schema = make_executable_schema(
    type_defs,
    query,
    mutation,
    order,
    datetime_scalar,
    decimal_scalar,
    uuid_scalar,
    convert_names_case=True,
)
