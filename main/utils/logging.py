"""
JSON formatter for structured logging.
"""
import json
import logging
from datetime import datetime, timezone

# Context keys services pass through ``extra=``.
CONTEXT_FIELDS = (
    "request_id",
    "user_id",
    "operation",
    "status",
    "previous_status",
    "idempotency_key",
    "error",
    "error_type",
    "product_id",
    "order_id",
    "order_number",
    "review_id",
    "delta",
    "previous_quantity",
    "new_quantity",
    "total_amount",
    "items_count",
    "review_count",
    "average_rating",
    "variables",
)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)
