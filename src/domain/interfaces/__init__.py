"""
Domain Interfaces (Ports)
"""

from .clients import RawResponse, UpstreamClient, UpstreamOperation, UpstreamRequest

__all__ = [
    "RawResponse",
    "UpstreamClient",
    "UpstreamOperation",
    "UpstreamRequest",
]
