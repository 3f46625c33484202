"""Data Transfer Objects for application layer."""

from .credits import CallerContext, CheckoutSession, PassThroughResult, TransactionListing

__all__ = [
    "CallerContext",
    "CheckoutSession",
    "PassThroughResult",
    "TransactionListing",
]
