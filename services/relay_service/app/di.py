"""Dependency Injection providers for Relay Service.

Provides an APP-scoped shared HTTP client and relay implementation, and a
REQUEST-scoped correlation ID.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from services.relay_service.config import Settings, settings
from services.relay_service.implementations.upstream_relay_client import UpstreamRelayClient
from services.relay_service.protocols import UpstreamRelayProtocol


class RelayServiceProvider(Provider):
    scope = Scope.APP

    @provide
    def get_config(self) -> Settings:
        return settings

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client; closed when the container closes."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(config.HTTP_CLIENT_TIMEOUT_SECONDS)
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_upstream_relay(self, http_client: httpx.AsyncClient) -> UpstreamRelayProtocol:
        return UpstreamRelayClient(http_client)


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context."""

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state (set by CorrelationIDMiddleware)."""
        return getattr(request.state, "correlation_id", uuid4())
