"""
Balance shape detection.

The parent answers balance reads with one of two payloads:
- a BalanceView ``{projectId, creditsRemaining, isPaid}`` for ordinary users
- an EarningsView ``{role, totalEarnedCents, availableCents, ...}`` for
  project creators

The gateway forwards whichever arrived untouched; this module only tags it.
"""

import json
from numbers import Number
from typing import Any, Optional

from src.domain.entities import BalancePayload, BalanceShape, BalanceView, EarningsView

EARNINGS_AMOUNT_FIELDS = ("totalEarnedCents", "availableCents", "pendingCents")
BALANCE_FIELDS = ("creditsRemaining", "isPaid")


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _as_int(value: Any) -> Optional[int]:
    return int(value) if _is_number(value) else None


def is_earnings_payload(payload: Any) -> bool:
    """A payload is an earnings view if it marks a creator or carries amounts."""
    if not isinstance(payload, dict):
        return False
    if payload.get("role") == "creator":
        return True
    return any(_is_number(payload.get(name)) for name in EARNINGS_AMOUNT_FIELDS)


def is_balance_payload(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    return any(name in payload for name in BALANCE_FIELDS)


def detect_balance_shape(payload: Any) -> BalancePayload:
    """
    Tag a decoded balance payload.

    Earnings take precedence: a creator payload may also carry balance
    fields, and the creator view must not be mistaken for a plain balance.
    """
    if is_earnings_payload(payload):
        return BalancePayload(
            shape=BalanceShape.EARNINGS,
            raw=payload,
            view=EarningsView(
                role=payload.get("role"),
                total_earned_cents=_as_int(payload.get("totalEarnedCents")),
                available_cents=_as_int(payload.get("availableCents")),
                pending_cents=_as_int(payload.get("pendingCents")),
                last_30_days_cents=_as_int(payload.get("last30DaysCents")),
                currency=payload.get("currency"),
            ),
        )

    if is_balance_payload(payload):
        credits = _as_int(payload.get("creditsRemaining"))
        return BalancePayload(
            shape=BalanceShape.BALANCE,
            raw=payload,
            view=BalanceView(
                project_id=payload.get("projectId"),
                credits_remaining=max(credits or 0, 0),
                is_paid=bool(payload.get("isPaid")),
            ),
        )

    return BalancePayload(shape=BalanceShape.UNKNOWN, raw=payload)


def detect_balance_shape_from_bytes(content: bytes) -> BalancePayload:
    """Tag a raw body; undecodable bodies are reported as unknown."""
    try:
        payload = json.loads(content) if content else None
    except ValueError:
        payload = None
    return detect_balance_shape(payload)
