"""Upstream relay client implementation.

Forwards parsed payloads to the fixed upstream endpoint over a shared
httpx AsyncClient and decodes the JSON it answers with.
"""

from __future__ import annotations

from uuid import UUID

import httpx

from services.relay_service.error_handling import (
    raise_external_service_error,
    raise_invalid_response,
)
from services.relay_service.logging_utils import create_service_logger
from services.relay_service.protocols import UpstreamRelayProtocol
from services.relay_service.utils.json_utils import JsonValue, decode_json, encode_compact

logger = create_service_logger("relay.upstream_client")

UPSTREAM_URL = "https://postman-echo.com/post"
UPSTREAM_SERVICE = "postman_echo"
SERVICE_NAME = "relay_service"


def _describe_error(error: Exception) -> str:
    return str(error) or type(error).__name__


class UpstreamRelayClient(UpstreamRelayProtocol):
    """Relay client bound to the upstream echo endpoint.

    The upstream status code is not inspected: whatever JSON the upstream
    returns is relayed.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the relay client.

        Args:
            client: Shared httpx AsyncClient, owned by the DI container
        """
        self._client = client

    async def forward(self, payload: JsonValue, correlation_id: UUID) -> JsonValue:
        request = self._client.build_request(
            "POST",
            UPSTREAM_URL,
            content=encode_compact(payload),
            headers={"Content-Type": "application/json"},
        )

        logger.info(f"Relaying payload to upstream: {UPSTREAM_URL}")

        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"Upstream request failed: {e}", exc_info=True)
            raise_external_service_error(
                service=SERVICE_NAME,
                operation="forward",
                external_service=UPSTREAM_SERVICE,
                message=f"API request failed: {_describe_error(e)}",
                correlation_id=correlation_id,
                url=UPSTREAM_URL,
            )

        try:
            raw = await response.aread()
            decoded = decode_json(raw)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                f"Failed to decode upstream response: {e}",
                upstream_status=response.status_code,
            )
            raise_invalid_response(
                service=SERVICE_NAME,
                operation="forward",
                external_service=UPSTREAM_SERVICE,
                message="Failed to decode API response",
                correlation_id=correlation_id,
                upstream_status=response.status_code,
            )
        finally:
            await response.aclose()

        logger.info("Upstream responded", upstream_status=response.status_code)
        return decoded
