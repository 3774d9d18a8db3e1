"""Unit tests for the upstream relay client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import uuid4

import httpx
import pytest
from respx import MockRouter

from services.relay_service.error_handling import ErrorCode, RelayError
from services.relay_service.implementations.upstream_relay_client import (
    UPSTREAM_URL,
    UpstreamRelayClient,
)

CORRELATION_ID = uuid4()


@pytest.fixture
async def relay_client() -> AsyncIterator[UpstreamRelayClient]:
    """Create relay client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield UpstreamRelayClient(http_client)


@pytest.mark.asyncio
async def test_forward_returns_decoded_upstream_json(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.post(UPSTREAM_URL).mock(
        return_value=httpx.Response(200, json={"json": {"name": "Ада"}})
    )

    result = await relay_client.forward({"name": "Ада"}, CORRELATION_ID)

    assert result == {"json": {"name": "Ада"}}
    request = route.calls.last.request
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    assert request.content == '{"name":"Ада"}'.encode("utf-8")


@pytest.mark.asyncio
async def test_forward_sends_null_payload_as_json_text(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    route = respx_mock.post(UPSTREAM_URL).mock(return_value=httpx.Response(200, content=b"null"))

    result = await relay_client.forward(None, CORRELATION_ID)

    assert result is None
    assert route.calls.last.request.content == b"null"


@pytest.mark.asyncio
async def test_forward_transport_failure_raises_external_service_error(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(UPSTREAM_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

    with pytest.raises(RelayError) as exc_info:
        await relay_client.forward({"a": 1}, CORRELATION_ID)

    error = exc_info.value
    assert error.status_code == 502
    assert error.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert error.message == "API request failed: timed out"
    assert error.correlation_id == CORRELATION_ID
    assert error.error_detail.details["external_service"] == "postman_echo"


@pytest.mark.asyncio
async def test_forward_transport_failure_without_message_names_error_type(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(UPSTREAM_URL).mock(side_effect=httpx.ReadTimeout(""))

    with pytest.raises(RelayError) as exc_info:
        await relay_client.forward({"a": 1}, CORRELATION_ID)

    assert exc_info.value.message == "API request failed: ReadTimeout"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [b"not json at all", b"", b'{"a": NaN}', b"\xc3\x28", b'{"x": 1e400}'],
)
async def test_forward_undecodable_body_raises_invalid_response(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter, content: bytes
) -> None:
    respx_mock.post(UPSTREAM_URL).mock(return_value=httpx.Response(200, content=content))

    with pytest.raises(RelayError) as exc_info:
        await relay_client.forward({"a": 1}, CORRELATION_ID)

    error = exc_info.value
    assert error.status_code == 502
    assert error.error_code == ErrorCode.INVALID_RESPONSE
    assert error.message == "Failed to decode API response"
    assert error.error_detail.details["upstream_status"] == 200


@pytest.mark.asyncio
async def test_forward_does_not_inspect_upstream_status(
    relay_client: UpstreamRelayClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(UPSTREAM_URL).mock(
        return_value=httpx.Response(404, json={"detail": "missing"})
    )

    result = await relay_client.forward({"a": 1}, CORRELATION_ID)

    assert result == {"detail": "missing"}
