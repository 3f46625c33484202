"""Data transfer objects for credit operations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from src.domain.entities import BalanceShape


@dataclass(frozen=True)
class CallerContext:
    """
    What the gateway carries over from the inbound request.

    ``headers`` holds the caller's headers, of which only credentials are
    forwarded; ``diagnostics`` holds gateway-chosen headers such as the
    originating host.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    diagnostics: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PassThroughResult:
    """An upstream body forwarded to the caller unchanged."""

    status_code: int
    content: bytes
    content_type: str = "application/json"
    shape: BalanceShape | None = None


@dataclass(frozen=True)
class CheckoutSession:
    """The parent-issued checkout redirect."""

    url: str

    def to_dict(self) -> dict:
        return {"success": True, "url": self.url}


@dataclass(frozen=True)
class TransactionListing:
    """
    Transaction history for a project.

    ``transactions`` are the parent's records verbatim. ``extras`` keeps any
    other top-level fields the parent sent.
    """

    transactions: List[Any]
    total_earned_cents: int
    total_earned_computed: bool
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            **self.extras,
            "transactions": self.transactions,
            "totalEarnedCents": self.total_earned_cents,
            "totalEarnedComputed": self.total_earned_computed,
        }
