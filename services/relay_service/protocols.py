"""
Protocols for Relay Service.

Route handlers depend on these protocols, not on concrete implementations.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from services.relay_service.utils.json_utils import JsonValue


class UpstreamRelayProtocol(Protocol):
    """Protocol for forwarding a JSON payload to the fixed upstream."""

    async def forward(self, payload: JsonValue, correlation_id: UUID) -> JsonValue:
        """POST the payload upstream and return the decoded JSON response.

        Raises:
            RelayError: 502 when the request fails or the response is not JSON.
        """
        ...
