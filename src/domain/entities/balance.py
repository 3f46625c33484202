"""Balance payload shapes returned by the parent service."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BalanceShape(str, Enum):
    """Which view the parent answered a balance read with."""

    BALANCE = "balance"
    EARNINGS = "earnings"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BalanceView:
    """Credits remaining for a project."""

    project_id: Optional[str]
    credits_remaining: int
    is_paid: bool


@dataclass(frozen=True)
class EarningsView:
    """Creator earnings summary. Amounts are in cents."""

    role: Optional[str] = None
    total_earned_cents: Optional[int] = None
    available_cents: Optional[int] = None
    pending_cents: Optional[int] = None
    last_30_days_cents: Optional[int] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class BalancePayload:
    """
    Tagged union over the balance shapes.

    ``raw`` is the decoded upstream payload and is what gets forwarded;
    ``view`` is the typed reading of it, or None for unknown shapes.
    """

    shape: BalanceShape
    raw: Any
    view: BalanceView | EarningsView | None = None
