"""HTTP Middleware — request id propagation and per-request access logging.

Invariants:
    - Every response carries X-Request-ID (inbound value echoed, otherwise a fresh uuid4 hex)
    - request.state.request_id holds the id for handlers running outside this middleware
    - The request id is bound to the logging context before any handler runs
    - Exactly one "HTTP request" access log line per request, with status and duration_ms

Design Decisions:
    - Two small middlewares over one: request id must wrap access logging so the
      access line carries the id
    - BaseHTTPMiddleware: handlers are plain JSON endpoints, no streaming bodies
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from user_management.infrastructure.observability import (
    get_request_id,
    set_request_id,
)

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Generate or propagate the request id and echo it on the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency for every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "HTTP request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": request.client.host if request.client else None,
                "request_id": get_request_id(),
            },
        )
        return response
