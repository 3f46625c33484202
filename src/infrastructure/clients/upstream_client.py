"""HTTP implementation of UpstreamClient."""

import asyncio
from typing import Dict, Optional

import httpx
import structlog

from src.core.config import GatewayConfig, get_gateway_config
from src.core.metrics import (
    record_upstream_failure,
    record_upstream_response,
    track_upstream_latency,
)
from src.domain.exceptions import UpstreamTimeoutException, UpstreamUnreachableException
from src.domain.interfaces import RawResponse, UpstreamClient, UpstreamRequest

logger = structlog.get_logger(__name__)

# Caller credentials forwarded verbatim; the parent enforces authorization.
FORWARDED_HEADERS = ("authorization", "cookie")


def build_upstream_headers(request: UpstreamRequest) -> Dict[str, str]:
    """
    Assemble outbound headers.

    Diagnostic headers are applied first and may never carry a forwarded
    credential name, so caller-supplied credentials always win.
    """
    headers = {"accept": "application/json"}

    for name, value in request.diagnostics.items():
        key = name.lower()
        if key in FORWARDED_HEADERS or not value:
            continue
        headers[key] = value

    inbound = {name.lower(): value for name, value in request.inbound_headers.items()}
    for name in FORWARDED_HEADERS:
        if inbound.get(name):
            headers[name] = inbound[name]

    return headers


class HttpUpstreamClient(UpstreamClient):
    """
    HTTP client for the parent accounting service.

    Every call is bounded twice: httpx enforces the per-phase timeout and
    ``asyncio.wait_for`` caps the whole exchange, cancelling the in-flight
    request when the budget runs out. Calls are never retried.
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = config or get_gateway_config()
        self._base_url = config.base_url
        self._timeout = config.timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def call(self, request: UpstreamRequest) -> RawResponse:
        """Send one request to the parent service."""
        url = f"{self._base_url}{request.path}"
        operation = request.operation
        log = logger.bind(
            operation=operation,
            method=request.method,
            path=request.path,
        )

        try:
            with track_upstream_latency(operation):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await asyncio.wait_for(
                        client.request(
                            request.method,
                            url,
                            params=request.query or None,
                            json=request.json_body,
                            headers=build_upstream_headers(request),
                        ),
                        timeout=self._timeout,
                    )

        except (httpx.TimeoutException, asyncio.TimeoutError):
            record_upstream_failure(operation, "timeout")
            log.warning("upstream_timeout", timeout_seconds=self._timeout)
            raise UpstreamTimeoutException(operation, self._timeout)
        except httpx.TransportError as e:
            record_upstream_failure(operation, "unreachable")
            log.error(
                "upstream_unreachable",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamUnreachableException(operation, str(e))

        record_upstream_response(operation, response.status_code)
        log.info("upstream_responded", status_code=response.status_code)

        return RawResponse(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type") or "application/json",
        )
