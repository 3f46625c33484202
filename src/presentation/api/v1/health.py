"""Liveness endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from src import __version__
from src.core.config import GatewayConfig, get_gateway_config

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    parent_base_url: str
    parent_configured: bool


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="""
    Reports that the gateway is up and which parent service it talks to.
    The parent itself is not contacted.
    """,
)
async def health_check(
    config: Annotated[GatewayConfig, Depends(get_gateway_config)],
) -> HealthResponse:
    return HealthResponse(
        version=__version__,
        parent_base_url=config.base_url,
        parent_configured=config.base_url_configured,
    )


@health_router.head("/health", status_code=204, summary="Health Check (HEAD)")
async def health_head() -> Response:
    return Response(status_code=204)
