"""External API client implementations."""

from .adapter import UPSTREAM_ROUTES, UpstreamAdapter, UpstreamOperation, UpstreamRoute
from .upstream_client import HttpUpstreamClient, build_upstream_headers

__all__ = [
    "UPSTREAM_ROUTES",
    "UpstreamAdapter",
    "UpstreamOperation",
    "UpstreamRoute",
    "HttpUpstreamClient",
    "build_upstream_headers",
]
