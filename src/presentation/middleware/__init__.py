"""Request processing middleware and exception handlers."""

from .error_handler import ErrorTranslation, error_handler_middleware, translate_exception
from .logging import LoggingMiddleware
from .request_context import RequestContextMiddleware, get_request_id

__all__ = [
    "ErrorTranslation",
    "error_handler_middleware",
    "translate_exception",
    "LoggingMiddleware",
    "RequestContextMiddleware",
    "get_request_id",
]
