"""Version 1 credit routes, mounted under the API prefix."""

from fastapi import APIRouter

from .credits import credits_router, payments_router
from .health import health_router

router = APIRouter()

router.include_router(credits_router, tags=["Credits"])
# Legacy clients post checkouts to /api/create-payment
router.include_router(payments_router, tags=["Payments"])

__all__ = ["router", "health_router"]
