"""Gateway Exceptions - Caller errors and parent service failures."""

from .base import GatewayException, InternalGatewayException
from .validation import MissingIdentifierException, ValidationException
from .upstream import (
    UpstreamException,
    UpstreamProtocolException,
    UpstreamRejectedException,
    UpstreamTimeoutException,
    UpstreamUnreachableException,
)

__all__ = [
    "GatewayException",
    "InternalGatewayException",
    "MissingIdentifierException",
    "ValidationException",
    "UpstreamException",
    "UpstreamProtocolException",
    "UpstreamRejectedException",
    "UpstreamTimeoutException",
    "UpstreamUnreachableException",
]
