"""HTTP API routers."""

from fastapi import APIRouter

from src.core.config import API_PREFIX
from .v1.router import health_router, router

api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(router, prefix=API_PREFIX)

__all__ = ["api_router"]
