"""
Inbound gate for the relay endpoint.

Each step either returns the value the next step needs or raises a
``RelayError`` that the registered error handlers turn into the terminal
response. Method and path are enforced by routing before these steps run.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Request
from starlette.requests import ClientDisconnect

from services.relay_service.error_handling import (
    raise_invalid_request,
    raise_parsing_error,
    raise_unsupported_media_type,
)
from services.relay_service.logging_utils import create_service_logger
from services.relay_service.utils.json_utils import JsonValue, decode_json

logger = create_service_logger("relay.inbound_gate")

SERVICE_NAME = "relay_service"
REQUIRED_CONTENT_TYPE = "application/json"


def ensure_json_content_type(request: Request, correlation_id: UUID) -> None:
    """Require the Content-Type header to be exactly ``application/json``."""
    content_type = request.headers.get("content-type")
    if content_type != REQUIRED_CONTENT_TYPE:
        raise_unsupported_media_type(
            service=SERVICE_NAME,
            operation="ensure_json_content_type",
            message=f"Expected {REQUIRED_CONTENT_TYPE}",
            correlation_id=correlation_id,
            received_content_type=content_type,
        )


async def read_request_body(request: Request, correlation_id: UUID) -> bytes:
    """Buffer the complete request body. No size limit is applied."""
    try:
        return await request.body()
    except (ClientDisconnect, OSError) as e:
        raise_invalid_request(
            service=SERVICE_NAME,
            operation="read_request_body",
            message="Failed to read body",
            correlation_id=correlation_id,
            reason=type(e).__name__,
        )


def parse_json_payload(body: bytes, correlation_id: UUID) -> JsonValue:
    """Parse the body as any JSON value; no schema is enforced."""
    try:
        return decode_json(body)
    except ValueError as e:
        raise_parsing_error(
            service=SERVICE_NAME,
            operation="parse_json_payload",
            message="Invalid JSON format",
            correlation_id=correlation_id,
            reason=str(e),
        )
