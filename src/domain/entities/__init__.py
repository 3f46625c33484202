"""Domain Entities - Request-scoped value objects."""

from .identity import Identity
from .checkout import BillingInterval, CheckoutKind, CheckoutRequest, ProductDescriptor
from .debit import DebitRequest
from .balance import BalancePayload, BalanceShape, BalanceView, EarningsView
from .transaction import TransactionRecord, TransactionStatus

__all__ = [
    "Identity",
    "BillingInterval",
    "CheckoutKind",
    "CheckoutRequest",
    "ProductDescriptor",
    "DebitRequest",
    "BalancePayload",
    "BalanceShape",
    "BalanceView",
    "EarningsView",
    "TransactionRecord",
    "TransactionStatus",
]
