"""Access logging and HTTP metrics middleware."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

# Liveness checks and scrapes are frequent; they are logged at debug only
QUIET_PATHS = frozenset({"/health", "/metrics"})


def route_template(request: Request, path: str) -> str:
    """
    Full route path template, so metric labels stay bounded.

    Depending on the FastAPI release, the matched route may carry its path
    relative to the router it was declared on (``/credits/balance`` for a
    request to ``/api/credits/balance``). The missing mount prefix is taken
    from the leading segments of the served path; every template parameter
    spans exactly one segment, as no route uses a ``:path`` convertor.
    """
    template = getattr(request.scope.get("route"), "path", None)
    if not template:
        return path

    served = [part for part in path.split("/") if part]
    declared = [part for part in template.split("/") if part]
    if len(served) <= len(declared):
        return template

    prefix = "/".join(served[: len(served) - len(declared)])
    return f"/{prefix}{template}" if template != "/" else f"/{prefix}"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Writes one access log event per request and records HTTP metrics.

    The request ID is already bound to the log context by
    RequestContextMiddleware. Query strings are not logged since they carry
    caller identifiers on every credit route.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - started
            record_http_request(method, route_template(request, path), 500, elapsed)
            logger.error(
                "request_crashed",
                method=method,
                path=path,
                error_type=type(e).__name__,
                duration_ms=round(elapsed * 1000, 2),
            )
            raise

        elapsed = time.perf_counter() - started
        endpoint = route_template(request, path)
        record_http_request(method, endpoint, response.status_code, elapsed)

        if path in QUIET_PATHS:
            emit = logger.debug
        elif response.status_code >= 500:
            emit = logger.warning
        else:
            emit = logger.info

        emit(
            "request_completed",
            method=method,
            path=path,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round(elapsed * 1000, 2),
        )
        return response
