"""Application services (use cases)."""

from .credits_service import CreditsService

__all__ = [
    "CreditsService",
]
