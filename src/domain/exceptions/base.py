"""Base gateway exception."""


class GatewayException(Exception):
    """
    Base exception for all gateway-level errors.

    Every subclass carries the HTTP status the error translator maps it to,
    so status codes stay identical across operations.
    """

    status_code: int = 500

    def __init__(self, message: str, code: str = "GATEWAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class InternalGatewayException(GatewayException):
    """Raised when an operation fails for an unexpected local reason."""

    status_code = 500

    def __init__(self, operation: str):
        super().__init__(
            message="Internal error",
            code="INTERNAL_ERROR",
        )
        self.operation = operation
