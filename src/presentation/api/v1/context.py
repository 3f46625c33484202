"""Helpers turning an inbound request into service inputs."""

import json
from typing import Any, Dict

from starlette.requests import Request

from src.application.dto import CallerContext
from src.domain.exceptions import ValidationException
from src.infrastructure.clients.upstream_client import FORWARDED_HEADERS
from src.presentation.middleware.request_context import get_request_id


def caller_context(request: Request) -> CallerContext:
    """
    Collect caller credentials and diagnostic headers.

    Credentials are copied opaquely; the gateway never inspects them.
    """
    headers = {
        name: request.headers[name]
        for name in FORWARDED_HEADERS
        if request.headers.get(name)
    }

    host = request.headers.get("host")
    origin = request.headers.get("origin") or (
        f"{request.url.scheme}://{host}" if host else None
    )
    diagnostics = {
        "x-forwarded-host": host,
        "origin": origin,
        "x-request-id": get_request_id(),
    }

    return CallerContext(
        headers=headers,
        diagnostics={k: v for k, v in diagnostics.items() if v},
    )


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    An empty body is treated as ``{}`` so that missing identifiers are
    reported by name.

    Raises:
        ValidationException: If the body is not a JSON object
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ValidationException("Invalid JSON body", field="body")
    if not isinstance(payload, dict):
        raise ValidationException("Request body must be a JSON object", field="body")
    return payload
