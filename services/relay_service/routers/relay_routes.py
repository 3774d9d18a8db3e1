"""
Relay route for Relay Service.

`POST /hello` validates the inbound request, forwards the parsed JSON to the
upstream echo service and returns the upstream JSON pretty-printed.
"""

from __future__ import annotations

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from starlette.responses import PlainTextResponse, Response

from services.relay_service.inbound_gate import (
    ensure_json_content_type,
    parse_json_payload,
    read_request_body,
)
from services.relay_service.logging_utils import create_service_logger
from services.relay_service.protocols import UpstreamRelayProtocol
from services.relay_service.utils.json_utils import render_pretty

router = APIRouter(route_class=DishkaRoute)
logger = create_service_logger("relay.routes")

SERIALIZE_FALLBACK_MESSAGE = "Failed to serialize response"


@router.post("/hello", include_in_schema=False)
async def relay_hello(
    request: Request,
    upstream: FromDishka[UpstreamRelayProtocol],
    correlation_id: FromDishka[UUID],
) -> Response:
    ensure_json_content_type(request, correlation_id)
    body = await read_request_body(request, correlation_id)
    payload = parse_json_payload(body, correlation_id)

    upstream_value = await upstream.forward(payload, correlation_id)

    try:
        content = render_pretty(upstream_value)
    except (TypeError, ValueError) as e:
        # Still a 200: the fallback text replaces the body, not the status
        logger.error(f"Failed to serialize upstream response: {e}", exc_info=True)
        return PlainTextResponse(SERIALIZE_FALLBACK_MESSAGE)

    return Response(content=content, media_type="application/json")
