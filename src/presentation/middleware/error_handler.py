"""Error translation and exception handlers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    GatewayException,
    UpstreamRejectedException,
    ValidationException,
)
from .request_context import REQUEST_ID_HEADER, request_id_for

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal error"


@dataclass(frozen=True)
class ErrorTranslation:
    """Status and JSON body returned to the caller for a failure."""

    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


def _rejected_status(exc: UpstreamRejectedException) -> int:
    # Only error statuses are passed through; a stray 1xx/3xx is a bad gateway
    if 400 <= exc.status_code <= 599:
        return exc.status_code
    return 502


def translate_exception(exc: Exception) -> ErrorTranslation:
    """
    Map a failure to the gateway's fixed error taxonomy.

    - ValidationException        -> 400, message names the field
    - UpstreamTimeoutException   -> 504
    - UpstreamUnreachable/Protocol -> 502
    - UpstreamRejectedException  -> upstream status, generic message
    - anything else              -> 500, no internal detail
    """
    if isinstance(exc, UpstreamRejectedException):
        body = {"error": exc.message}
        if exc.expose_details and exc.body:
            body["details"] = exc.body
        return ErrorTranslation(status_code=_rejected_status(exc), body=body)

    if isinstance(exc, GatewayException):
        return ErrorTranslation(status_code=exc.status_code, body={"error": exc.message})

    return ErrorTranslation(status_code=500, body={"error": INTERNAL_ERROR_MESSAGE})


def _respond(translation: ErrorTranslation, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=translation.status_code,
        content=translation.body,
        headers=headers,
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Every handler goes through translate_exception so all operations share
    one status mapping.
    """

    @app.exception_handler(ValidationException)
    async def validation_handler(
        request: Request,
        exc: ValidationException,
    ) -> JSONResponse:
        """Handle caller input errors."""
        return _respond(translate_exception(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle FastAPI parameter validation errors in the gateway format."""
        errors = exc.errors()
        location = errors[0].get("loc", ()) if errors else ()
        field_name = str(location[-1]) if location else "request"
        return _respond(
            translate_exception(ValidationException(f"Invalid {field_name}", field=field_name))
        )

    @app.exception_handler(GatewayException)
    async def gateway_exception_handler(
        request: Request,
        exc: GatewayException,
    ) -> JSONResponse:
        """Handle upstream and internal gateway failures."""
        translation = translate_exception(exc)
        logger.error(
            "request_failed",
            request_id=request_id_for(request),
            code=exc.code,
            status_code=translation.status_code,
            operation=getattr(exc, "operation", None),
        )
        return _respond(translation)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Runs outside RequestContextMiddleware, so the correlation ID is
        echoed here as well.
        """
        request_id = request_id_for(request)
        logger.exception(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        return _respond(translate_exception(exc), headers)
