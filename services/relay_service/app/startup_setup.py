"""Lifecycle hooks for Relay Service."""

from __future__ import annotations

from dishka import AsyncContainer

from services.relay_service.logging_utils import create_service_logger
from services.relay_service.protocols import UpstreamRelayProtocol

logger = create_service_logger("relay.startup")


async def warm_up_upstream_client(container: AsyncContainer) -> None:
    """Build the shared outbound client now so a failure aborts startup."""
    try:
        await container.get(UpstreamRelayProtocol)
        logger.info("Upstream HTTP client initialized")
    except Exception as e:
        logger.critical(f"Failed to build upstream HTTP client: {e}", exc_info=True)
        raise


async def shutdown_services(container: AsyncContainer) -> None:
    """Close the container, releasing the shared HTTP client."""
    await container.close()
    logger.info("Relay Service shutdown completed")
