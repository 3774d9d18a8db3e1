"""Middleware for Relay Service."""

from __future__ import annotations

from uuid import UUID, uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from services.relay_service.logging_utils import (
    bind_request_context,
    clear_request_context,
    create_service_logger,
)

logger = create_service_logger("relay.middleware")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to every request and its log lines.

    The ID is taken from X-Correlation-ID when it is a valid UUID. It is not
    echoed back: responses carry no headers beyond the defaults.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                logger.warning(
                    f"Invalid correlation ID format: {x_correlation_id}, generating new one"
                )
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        bind_request_context(correlation_id, request.method, request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_request_context()
