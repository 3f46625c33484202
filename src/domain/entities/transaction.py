"""Transaction record entity."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class TransactionStatus(str, Enum):
    """Settlement state of a ledger transaction."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransactionRecord:
    """
    Read-only view of a parent ledger transaction.

    Attributes:
        id: Parent-assigned identifier
        amount_cents: Signed amount in cents
        status: Settlement state
        created_at: ISO 8601 timestamp as sent by the parent
    """

    id: Optional[str]
    amount_cents: int
    status: TransactionStatus
    created_at: Optional[str] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_completed(self) -> bool:
        return self.status == TransactionStatus.COMPLETED

    @property
    def amount_dollars(self) -> float:
        return self.amount_cents / 100
