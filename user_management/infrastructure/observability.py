"""Structured Logging — JSON formatter, request-id context, and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, message, service and environment
    - request_id of the current request is attached when one is set
    - Extra fields (method, path, status, duration_ms, user_id, error_code) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - request_id in a ContextVar: each asyncio task sees its own request, no globals to reset
    - setup_logging called once on startup via lifespan; repeated calls replace the handler
"""

import logging
import json
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone


_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

_EXTRA_FIELDS = (
    "method", "path", "status", "duration_ms", "client_ip",
    "user_id", "error_code",
)


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request id to the current context, generating one if needed."""
    request_id = request_id or uuid.uuid4().hex
    _request_id.set(request_id)
    return request_id


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def __init__(self, service: str = "user-management", environment: str = "development"):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "env": self.environment,
        }
        request_id = record.__dict__.get("request_id") or get_request_id()
        if request_id:
            log["request_id"] = request_id
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    service: str = "user-management",
    environment: str = "development",
):
    """Configure logging for the application."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter(service, environment))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _handler = handler
