from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from services.relay_service.app.di import RelayServiceProvider, RequestContextProvider
from services.relay_service.app.middleware import CorrelationIDMiddleware
from services.relay_service.app.startup_setup import shutdown_services, warm_up_upstream_client
from services.relay_service.config import settings
from services.relay_service.error_handling import register_error_handlers
from services.relay_service.logging_utils import (
    configure_service_logging,
    create_service_logger,
)
from services.relay_service.routers import relay_routes

configure_service_logging(
    settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("relay.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    logger.info("Starting Relay Service...")
    container: AsyncContainer = app.state.di_container

    await warm_up_upstream_client(container)

    yield

    logger.info("Shutting down Relay Service...")
    await shutdown_services(container)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="1.0.0",
        description="Relay Service - forwards JSON payloads to a fixed upstream endpoint",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # Register error handlers
    register_error_handlers(app)

    # Add Correlation ID Middleware
    app.add_middleware(CorrelationIDMiddleware)

    # Include routers
    app.include_router(relay_routes.router)

    # Setup Dishka DI container
    if container is None:
        container = make_async_container(
            RelayServiceProvider(),
            RequestContextProvider(),
            FastapiProvider(),
        )
    setup_dishka(container, app)

    # Store container reference for lifespan and cleanup
    app.state.di_container = container

    return app


app = create_app()


def main() -> None:
    import uvicorn

    address = f"{settings.HTTP_HOST}:{settings.HTTP_PORT}"
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.HTTP_HOST,
            port=settings.HTTP_PORT,
            log_level=settings.LOG_LEVEL.lower(),
        )
    )

    logger.info(f"Listening on http://{address}")
    try:
        server.run()
    except (OSError, SystemExit) as e:
        # uvicorn exits on its own when the bind fails
        logger.critical(f"Server error: unable to serve on {address} ({e!r})")
        raise SystemExit(1) from e

    if not server.started:
        logger.critical(f"Server error: failed to start on {address}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
