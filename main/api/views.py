"""
GraphQL view with idempotency and logging support.
"""
import hashlib
import json
import logging
from uuid import UUID, uuid4

from ariadne import graphql_sync
from django.conf import settings
from django.db import IntegrityError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from main.api.middleware import ErrorHandler, format_graphql_error
from main.api.schema import schema
from main.infra.models import IdempotencyKey
from main.infra.pii_masker import mask_pii_in_dict, mask_uuid

logger = logging.getLogger(__name__)

# Mutation field name -> idempotency operation bucket.
OPERATIONS = (
    ("placeOrder", "PLACE_ORDER"),
    ("setOrderStatus", "SET_ORDER_STATUS"),
    ("setPaymentStatus", "SET_PAYMENT_STATUS"),
    ("adjustStock", "ADJUST_STOCK"),
    ("createReview", "REVIEW"),
    ("updateReview", "REVIEW"),
    ("deleteReview", "REVIEW"),
)


class MarketplaceGraphQLView:
    """GraphQL view with idempotency and structured logging."""

    def dispatch(self, request, *args, **kwargs):
        """Handle GraphQL request with idempotency."""
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        idempotency_key = request.headers.get("Idempotency-Key")
        user_id = request.headers.get("X-User-ID")

        logger.info(
            "graphql_request",
            extra={
                "request_id": request_id,
                "user_id": mask_uuid(user_id) if user_id else None,
                "idempotency_key": idempotency_key[:8] + "..." if idempotency_key else None,
                "operation": "graphql",
            },
        )

        if request.method == "GET":
            return JsonResponse({"message": "GraphQL endpoint. Use POST for queries."})

        try:
            data = json.loads(request.body)
        except json.JSONDecodeError:
            return ErrorHandler.error_response("VALIDATION_ERROR", "Invalid JSON")
        if not isinstance(data, dict):
            return ErrorHandler.error_response("VALIDATION_ERROR", "Request body must be a JSON object")

        if data.get("variables"):
            logger.debug(
                "graphql_variables",
                extra={"request_id": request_id, "variables": mask_pii_in_dict(data["variables"])},
            )

        user_uuid = self._parse_user_id(user_id, request_id)
        query = data.get("query") or ""
        try:
            if idempotency_key and user_uuid and self._is_mutation(query):
                response = self._dispatch_idempotent(request, data, idempotency_key, user_uuid, request_id)
            else:
                response = self._process_graphql_request(data, request)
        except Exception as e:
            # Resolver errors are formatted by graphql; this covers the transport itself.
            response = ErrorHandler.handle_error(e)

        logger.info(
            "graphql_response",
            extra={
                "request_id": request_id,
                "user_id": mask_uuid(user_id) if user_id else None,
                "status": response.status_code,
            },
        )
        return response

    def _dispatch_idempotent(self, request, data: dict, idempotency_key: str, user_uuid: UUID, request_id: str):
        query = data.get("query") or ""
        operation = self._extract_operation(query)
        request_hash = self._create_request_hash(query, data.get("variables") or {})

        existing = IdempotencyKey.objects.filter(
            key=idempotency_key,
            user_id=user_uuid,
            operation=operation,
        ).first()

        if existing:
            if existing.request_hash == request_hash:
                logger.info(
                    "idempotent_request_cached",
                    extra={
                        "request_id": request_id,
                        "idempotency_key": idempotency_key[:8] + "...",
                        "operation": operation,
                    },
                )
                return JsonResponse(existing.response_payload, safe=False)

            logger.warning(
                "idempotency_key_conflict",
                extra={
                    "request_id": request_id,
                    "idempotency_key": idempotency_key[:8] + "...",
                    "operation": operation,
                },
            )
            return ErrorHandler.error_response(
                "DUPLICATE_REQUEST",
                "Idempotency key already used with different request",
            )

        response = self._process_graphql_request(data, request)

        # Only successful results are replayed; failed mutations may be retried.
        response_data = json.loads(response.content)
        if response.status_code == 200 and not response_data.get("errors"):
            try:
                IdempotencyKey.objects.create(
                    key=idempotency_key,
                    user_id=user_uuid,
                    operation=operation,
                    request_hash=request_hash,
                    response_payload=response_data,
                )
            except IntegrityError:
                # A concurrent request with the same key stored its result first.
                logger.warning(
                    "idempotency_key_race",
                    extra={
                        "request_id": request_id,
                        "operation": operation,
                    },
                )
        return response

    def _parse_user_id(self, user_id: str | None, request_id: str) -> UUID | None:
        if not user_id:
            return None
        try:
            return UUID(user_id)
        except ValueError:
            logger.warning(
                "invalid_user_id",
                extra={
                    "request_id": request_id,
                    "user_id": mask_uuid(user_id),
                },
            )
            return None

    def _is_mutation(self, query: str) -> bool:
        return query.lstrip().lower().startswith("mutation")

    def _create_request_hash(self, query: str, variables: dict) -> str:
        """Create hash of request for deduplication."""
        content = json.dumps({"query": query, "variables": variables}, sort_keys=True)
        return hashlib.sha256(content.encode()).hexdigest()

    def _extract_operation(self, query: str) -> str:
        """Extract operation type from the mutation document."""
        for field_name, operation in OPERATIONS:
            if field_name in query:
                return operation
        return "UNKNOWN"

    def _process_graphql_request(self, data: dict, request):
        """Execute GraphQL query."""
        success, result = graphql_sync(
            schema,
            data,
            context_value={"request": request},
            debug=settings.DEBUG,
            error_formatter=format_graphql_error,
        )
        status_code = 200 if success else 400
        return JsonResponse(result, status=status_code)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def graphql_view(request):
    """GraphQL endpoint."""
    view = MarketplaceGraphQLView()
    return view.dispatch(request)
