"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends

from src.application.services import CreditsService
from src.core.config import GatewayConfig, get_gateway_config
from src.domain.interfaces import UpstreamClient
from src.infrastructure.clients import HttpUpstreamClient


# External client dependencies
def get_upstream_client(
    config: Annotated[GatewayConfig, Depends(get_gateway_config)],
) -> UpstreamClient:
    """Get an UpstreamClient bound to the configured parent service."""
    return HttpUpstreamClient(config)


# Service dependencies
def get_credits_service(
    upstream_client: Annotated[UpstreamClient, Depends(get_upstream_client)],
    config: Annotated[GatewayConfig, Depends(get_gateway_config)],
) -> CreditsService:
    """Get a CreditsService instance with all dependencies."""
    return CreditsService(upstream_client=upstream_client, config=config)
