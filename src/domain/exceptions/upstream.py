"""Parent service failure exceptions."""

from .base import GatewayException


class UpstreamException(GatewayException):
    """Base for failures talking to the parent service."""

    status_code = 502

    def __init__(self, message: str, operation: str, code: str = "UPSTREAM_ERROR"):
        super().__init__(message=message, code=code)
        self.operation = operation


class UpstreamTimeoutException(UpstreamException):
    """Raised when the parent service does not answer within the budget."""

    status_code = 504

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            message="Upstream timeout",
            operation=operation,
            code="UPSTREAM_TIMEOUT",
        )
        self.timeout_seconds = timeout_seconds


class UpstreamUnreachableException(UpstreamException):
    """Raised on network-level failures (DNS, refused connection, reset)."""

    status_code = 502

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message="Upstream unreachable",
            operation=operation,
            code="UPSTREAM_UNREACHABLE",
        )
        self.reason = reason


class UpstreamProtocolException(UpstreamException):
    """Raised when a successful upstream response has an unusable body."""

    status_code = 502

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message="Invalid upstream response",
            operation=operation,
            code="UPSTREAM_PROTOCOL_ERROR",
        )
        self.reason = reason


class UpstreamRejectedException(UpstreamException):
    """
    Raised when the parent service answers with a non-2xx status.

    The upstream status is passed through to the caller; the body is kept
    for operator logs and only exposed when explicitly enabled.
    """

    def __init__(
        self,
        operation: str,
        status_code: int,
        body: str,
        message: str = "Upstream request failed",
        expose_details: bool = False,
    ):
        super().__init__(
            message=message,
            operation=operation,
            code="UPSTREAM_REJECTED",
        )
        self.status_code = status_code
        self.body = body
        self.expose_details = expose_details
