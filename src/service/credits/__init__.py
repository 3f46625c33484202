"""
Credit Operation Logic for the Credits Gateway
"""

from .identity import (
    PROJECT_ID_ALIASES,
    USER_ID_ALIASES,
    normalize,
    resolve_identifier,
    resolve_project_id,
    resolve_user_id,
)
from .pricing import (
    amount_to_cents,
    build_product_descriptor,
    parse_amount,
    parse_checkout_request,
)
from .debit import parse_cost, parse_debit_request
from .shapes import detect_balance_shape, detect_balance_shape_from_bytes
from .earnings import (
    calculate_total_earned_cents,
    parse_transactions,
    upstream_total_earned_cents,
)

__all__ = [
    # Identity
    "PROJECT_ID_ALIASES",
    "USER_ID_ALIASES",
    "normalize",
    "resolve_identifier",
    "resolve_project_id",
    "resolve_user_id",
    # Pricing
    "amount_to_cents",
    "build_product_descriptor",
    "parse_amount",
    "parse_checkout_request",
    # Debit
    "parse_cost",
    "parse_debit_request",
    # Shapes
    "detect_balance_shape",
    "detect_balance_shape_from_bytes",
    # Earnings
    "calculate_total_earned_cents",
    "parse_transactions",
    "upstream_total_earned_cents",
]
