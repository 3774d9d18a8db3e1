"""
Error handling for Relay Service.

Every failure in the relay pipeline is raised as a ``RelayError`` via one of
the ``raise_*`` factories below and converted into its terminal plain-text
HTTP response by the handlers installed with ``register_error_handlers``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, NoReturn
from uuid import UUID

from fastapi import FastAPI, Request
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse

from services.relay_service.logging_utils import create_service_logger

logger = create_service_logger("relay.error_handling")

NOT_FOUND_MESSAGE = "Not Found"


class ErrorCode(str, Enum):
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    INVALID_REQUEST = "INVALID_REQUEST"
    PARSING_ERROR = "PARSING_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class ErrorDetail(BaseModel):
    """Data model for a single relay failure. Contains no behavior."""

    error_code: ErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class RelayError(Exception):
    """Exception carrying an ErrorDetail and the HTTP status it maps to."""

    def __init__(self, error_detail: ErrorDetail, status_code: int) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail
        self.status_code = status_code

    @property
    def error_code(self) -> ErrorCode:
        return self.error_detail.error_code

    @property
    def message(self) -> str:
        return self.error_detail.message

    @property
    def correlation_id(self) -> UUID:
        return self.error_detail.correlation_id

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"


def _raise(
    error_code: ErrorCode,
    status_code: int,
    *,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    error_detail = ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details,
    )
    raise RelayError(error_detail, status_code)


def raise_unsupported_media_type(
    service: str, operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    _raise(
        ErrorCode.UNSUPPORTED_MEDIA_TYPE,
        415,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **details,
    )


def raise_invalid_request(
    service: str, operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    _raise(
        ErrorCode.INVALID_REQUEST,
        400,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **details,
    )


def raise_parsing_error(
    service: str, operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    _raise(
        ErrorCode.PARSING_ERROR,
        400,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **details,
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    _raise(
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        502,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        external_service=external_service,
        **details,
    )


def raise_invalid_response(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **details: Any,
) -> NoReturn:
    _raise(
        ErrorCode.INVALID_RESPONSE,
        502,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        external_service=external_service,
        **details,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install plain-text handlers for relay errors and routing misses."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError) -> PlainTextResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"Relay request terminated: {exc}",
            error_code=exc.error_code.value,
            status_code=exc.status_code,
            operation=exc.error_detail.operation,
            correlation_id=str(exc.correlation_id),
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        # Unknown paths and wrong methods on /hello are both plain 404s
        if exc.status_code in (404, 405):
            logger.warning(
                "No route for request",
                method=request.method,
                path=request.url.path,
                status_code=exc.status_code,
            )
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)
