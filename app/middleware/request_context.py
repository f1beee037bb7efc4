"""
RequestContext Middleware - Adds request tracking to all requests.

This middleware adds a request_id to every request:
- reuses the caller's X-Request-ID header when present
- stores it on request.state.request_id
- binds it into structlog contextvars so every log line of the request
  carries it
- echoes it back in the X-Request-ID response header
"""

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Add request context to all incoming requests.

    Request.state Namespace Convention:
    - request_id: Set by RequestContextMiddleware
    - Do not add other attributes without updating this documentation
    """

    async def dispatch(self, request: Request, call_next):
        """Process request and add context."""

        request_id = self._extract_request_id(request)
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.debug(
            "Request started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        # Add request ID to response headers (for client-side tracing)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response

    def _extract_request_id(self, request: Request) -> str:
        """Use the caller's request ID when it looks sane, otherwise mint one."""
        incoming = request.headers.get(REQUEST_ID_HEADER)
        if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
            return incoming
        return str(uuid.uuid4())
