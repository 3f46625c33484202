"""
Unit tests for balance shape detection.

These tests verify:
1. Plain balances and creator earnings are told apart
2. Earnings take precedence when both sets of fields appear
3. Unrecognized bodies are tagged unknown, never rejected
"""

import json

from src.domain.entities import BalanceShape, BalanceView, EarningsView
from src.service.credits.shapes import (
    detect_balance_shape,
    detect_balance_shape_from_bytes,
    is_earnings_payload,
)


class TestDetectBalanceShape:

    def test_balance_view(self):
        payload = {"projectId": "p1", "creditsRemaining": 42, "isPaid": True}

        tagged = detect_balance_shape(payload)

        assert tagged.shape == BalanceShape.BALANCE
        assert tagged.raw is payload
        assert tagged.view == BalanceView(project_id="p1", credits_remaining=42, is_paid=True)

    def test_negative_credits_clamped_in_view(self):
        tagged = detect_balance_shape({"creditsRemaining": -3, "isPaid": False})

        assert tagged.view.credits_remaining == 0

    def test_earnings_view(self):
        payload = {"role": "creator", "totalEarnedCents": 1200, "availableCents": 800}

        tagged = detect_balance_shape(payload)

        assert tagged.shape == BalanceShape.EARNINGS
        assert isinstance(tagged.view, EarningsView)
        assert tagged.view.total_earned_cents == 1200
        assert tagged.view.available_cents == 800
        assert tagged.view.pending_cents is None

    def test_earnings_wins_over_balance_fields(self):
        payload = {"creditsRemaining": 5, "isPaid": True, "pendingCents": 100}

        assert detect_balance_shape(payload).shape == BalanceShape.EARNINGS

    def test_creator_role_alone_is_earnings(self):
        assert is_earnings_payload({"role": "creator"})

    def test_boolean_amount_is_not_earnings(self):
        assert not is_earnings_payload({"availableCents": True})

    def test_unknown_shape(self):
        tagged = detect_balance_shape({"something": "else"})

        assert tagged.shape == BalanceShape.UNKNOWN
        assert tagged.view is None

    def test_non_object_is_unknown(self):
        assert detect_balance_shape([1, 2]).shape == BalanceShape.UNKNOWN


class TestDetectFromBytes:

    def test_decodes_json(self):
        content = json.dumps({"creditsRemaining": 1, "isPaid": False}).encode()

        assert detect_balance_shape_from_bytes(content).shape == BalanceShape.BALANCE

    def test_invalid_json_is_unknown(self):
        assert detect_balance_shape_from_bytes(b"<html>").shape == BalanceShape.UNKNOWN

    def test_empty_body_is_unknown(self):
        assert detect_balance_shape_from_bytes(b"").shape == BalanceShape.UNKNOWN
