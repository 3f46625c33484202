"""Caller input validation exceptions."""

from typing import Sequence

from .base import GatewayException


class ValidationException(GatewayException):
    """Raised when caller input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
        )
        self.field = field


class MissingIdentifierException(ValidationException):
    """Raised when user or project identifiers cannot be resolved."""

    def __init__(self, fields: Sequence[str]):
        names = ", ".join(fields)
        noun = "identifier" if len(fields) == 1 else "identifiers"
        super().__init__(
            message=f"Missing required {noun}: {names}",
            field=fields[0] if fields else None,
        )
        self.fields = tuple(fields)
