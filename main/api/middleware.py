"""
Error handling for the HTTP/GraphQL transport.
"""
import logging

from ariadne import format_error, unwrap_graphql_error
from django.http import JsonResponse
from graphql import GraphQLError

from main.domain.errors import MarketplaceError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Error handler for API responses."""

    ERROR_CODES = {
        "VALIDATION_ERROR": 400,
        "NOT_FOUND": 404,
        "INVALID_STATE": 409,
        "CONFLICT": 409,
        "DUPLICATE_REQUEST": 409,
        "INTERNAL_ERROR": 500,
    }

    @classmethod
    def error_response(cls, code: str, message: str) -> JsonResponse:
        return JsonResponse(
            {
                "error": {
                    "code": code,
                    "message": message,
                }
            },
            status=cls.ERROR_CODES.get(code, 400),
        )

    @classmethod
    def handle_error(cls, error: Exception) -> JsonResponse:
        """Handle error and return JSON response."""
        if isinstance(error, MarketplaceError):
            return cls.error_response(error.code, error.message)

        # Log unexpected errors
        logger.error(
            "unexpected_error",
            extra={
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=error,
        )
        return cls.error_response("INTERNAL_ERROR", "An internal error occurred")


def format_graphql_error(error: GraphQLError, debug: bool = False) -> dict:
    """Attach the domain error code to GraphQL errors as ``extensions.code``."""
    formatted = format_error(error, debug)
    original = unwrap_graphql_error(error)
    extensions = formatted.setdefault("extensions", {})

    if isinstance(original, MarketplaceError):
        formatted["message"] = original.message
        extensions["code"] = original.code
    elif original is error or original is None:
        # Parse/validation errors raised by graphql-core itself.
        extensions["code"] = "GRAPHQL_VALIDATION_FAILED"
    else:
        logger.error(
            "graphql_error",
            extra={
                "error_type": type(original).__name__,
                "error": str(original),
            },
            exc_info=original,
        )
        extensions["code"] = "INTERNAL_ERROR"
        if not debug:
            formatted["message"] = "An internal error occurred"
    return formatted
