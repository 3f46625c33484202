"""Pydantic schemas for API request/response documentation."""

from .credits import (
    BalanceViewSchema,
    CheckoutRequestSchema,
    CheckoutResponseSchema,
    DebitRequestSchema,
    EarningsViewSchema,
    IdentityFieldsSchema,
    TransactionListResponseSchema,
    TransactionSchema,
    request_body_docs,
)
from .error import ErrorResponseSchema

__all__ = [
    "BalanceViewSchema",
    "CheckoutRequestSchema",
    "CheckoutResponseSchema",
    "DebitRequestSchema",
    "EarningsViewSchema",
    "IdentityFieldsSchema",
    "TransactionListResponseSchema",
    "TransactionSchema",
    "request_body_docs",
    "ErrorResponseSchema",
]
