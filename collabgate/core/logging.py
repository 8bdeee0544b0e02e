import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict

from collabgate.core.config import settings
from collabgate.core.error_handling import request_id_var


class RequestIDFilter(logging.Filter):
    """
    Inject the current request_id (from ContextVar) into log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        record.request_id = request_id if request_id else ""
        return True

class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if settings.LOG_INCLUDE_REQUEST_ID and getattr(record, "request_id", ""):
            log_obj["request_id"] = record.request_id

        # Routing context (role, route, next hop) passed via extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            log_obj.update(record.extra_fields)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)

class RoutingTextFormatter(logging.Formatter):
    """
    Plain text formatter that appends routing context as key=value columns,
    e.g. "... - Routing as relay on 'A,B,C' | role=relay route=A,B,C ...".
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in extra_fields.items())
        return line


def setup_logging() -> None:
    """
    Configure logging for the gateway.
    Uses JSON logging if configured, otherwise standard text logging.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    if settings.LOG_FORMAT.lower() == "json":
        formatter = JSONFormatter()
    else:
        formatter = RoutingTextFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s" + (
                " - request_id=%(request_id)s" if settings.LOG_INCLUDE_REQUEST_ID else ""
            )
        )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    if settings.LOG_INCLUDE_REQUEST_ID:
        handler.addFilter(RequestIDFilter())

    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)  # One line per registry call otherwise
