"""Checkout session entities."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class CheckoutKind(str, Enum):
    """Whether the purchase recurs."""

    SUBSCRIPTION = "subscription"
    ONE_TIME = "one-time"


class BillingInterval(str, Enum):
    """Cadence unit for subscriptions."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def adverb(self) -> str:
        return "daily" if self is BillingInterval.DAY else f"{self.value}ly"


@dataclass(frozen=True)
class CheckoutRequest:
    """A validated request to buy credits."""

    amount: Decimal
    kind: CheckoutKind = CheckoutKind.ONE_TIME
    tier: Optional[str] = None
    interval: BillingInterval = BillingInterval.MONTH
    interval_count: int = 1

    @property
    def is_subscription(self) -> bool:
        return self.kind == CheckoutKind.SUBSCRIPTION


@dataclass(frozen=True)
class ProductDescriptor:
    """The product the parent service creates a checkout session for."""

    name: str
    description: str
    price_cents: int
