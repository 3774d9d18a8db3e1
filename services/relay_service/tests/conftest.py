"""
Shared fixtures for Relay Service tests.

Builds the real application via create_app() with a test DI container and
drives it in-process through httpx's ASGI transport.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider
from httpx import ASGITransport, AsyncClient

from services.relay_service.app.di import RequestContextProvider
from services.relay_service.app.main import create_app
from services.relay_service.tests.test_provider import InfrastructureTestProvider


@pytest.fixture
async def container() -> AsyncIterator[AsyncContainer]:
    """DI container with a real httpx client for respx-mocked upstream calls."""
    test_container = make_async_container(
        InfrastructureTestProvider(),
        RequestContextProvider(),
        FastapiProvider(),
    )
    yield test_container
    await test_container.close()


@pytest.fixture
async def client(container: AsyncContainer) -> AsyncIterator[AsyncClient]:
    app = create_app(container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
