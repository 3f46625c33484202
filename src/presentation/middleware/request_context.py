"""Per-request correlation ID."""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"

# Caller IDs are echoed and sent upstream, so only short opaque tokens are kept
_ACCEPTABLE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Correlation ID of the request being handled, if any."""
    return request_id_var.get()


def request_id_for(request: Request) -> Optional[str]:
    """
    Correlation ID for ``request``, also outside the middleware's scope.

    The catch-all exception handler runs in Starlette's outermost error
    middleware, after the context variable has been reset; the ID is then
    read from the request state, which shares the request's ASGI scope.
    """
    return get_request_id() or getattr(request.state, "request_id", None)


def choose_request_id(inbound: Optional[str]) -> str:
    """Reuse a well-formed caller ID, otherwise mint a new one."""
    if inbound and _ACCEPTABLE_REQUEST_ID.match(inbound):
        return inbound
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a correlation ID to the request.

    The ID is bound to every structlog event emitted while the request is
    handled, forwarded to the parent service as a diagnostic header and
    echoed on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = choose_request_id(request.headers.get(REQUEST_ID_HEADER))

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
