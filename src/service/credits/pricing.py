"""
Checkout Pricing for the Credits Gateway.

Turns a caller's purchase request into the product descriptor the parent
service creates a checkout session for.

Amounts arrive as JSON numbers in dollars. Converting them with binary
floating point would make ``9.99 * 100`` come out as ``998.9999...``, so
every conversion goes through ``Decimal`` built from the textual value.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

from src.domain.entities import (
    BillingInterval,
    CheckoutKind,
    CheckoutRequest,
    ProductDescriptor,
)
from src.domain.exceptions import ValidationException

CENTS_PER_DOLLAR = Decimal(100)
ONE_TIME_PRODUCT_LABEL = "Coffee"


def parse_amount(value: Any) -> Decimal:
    """
    Parse a dollar amount.

    Booleans are rejected even though Python treats them as integers.

    Raises:
        ValidationException: If the value is not a positive finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValidationException("Invalid amount", field="amount")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationException("Invalid amount", field="amount")
    if not amount.is_finite() or amount <= 0:
        raise ValidationException("Invalid amount", field="amount")
    return amount


def amount_to_cents(amount: Decimal) -> int:
    """
    Convert dollars to whole cents, rounding half up.

    Examples:
        9.99  -> 999
        0.005 -> 1
        0.004 -> 0
    """
    return int((amount * CENTS_PER_DOLLAR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _parse_enum(enum_cls, value: Any, default, field: str):
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationException(f"Invalid {field}: expected one of {allowed}", field=field)


def _parse_interval_count(value: Any) -> int:
    if value is None:
        return 1
    if isinstance(value, bool):
        raise ValidationException("Invalid intervalCount", field="intervalCount")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise ValidationException(
            "Invalid intervalCount: must be an integer >= 1",
            field="intervalCount",
        )
    return value


def parse_checkout_request(payload: Mapping[str, Any]) -> CheckoutRequest:
    """
    Build a CheckoutRequest from a caller payload.

    ``kind`` is also accepted under the legacy key ``type`` and
    ``intervalCount`` under ``interval_count``.

    Raises:
        ValidationException: Naming the first invalid field
    """
    amount = parse_amount(payload.get("amount"))

    kind_value = payload.get("kind")
    if kind_value is None:
        kind_value = payload.get("type")
    kind = _parse_enum(CheckoutKind, kind_value, CheckoutKind.ONE_TIME, "kind")

    interval = _parse_enum(
        BillingInterval, payload.get("interval"), BillingInterval.MONTH, "interval"
    )

    count_value = payload.get("intervalCount")
    if count_value is None:
        count_value = payload.get("interval_count")
    interval_count = _parse_interval_count(count_value)

    tier = payload.get("tier")
    if tier is not None and not isinstance(tier, str):
        raise ValidationException("Invalid tier", field="tier")
    tier = tier.strip() if tier and tier.strip() else None

    return CheckoutRequest(
        amount=amount,
        kind=kind,
        tier=tier,
        interval=interval,
        interval_count=interval_count,
    )


def build_product_descriptor(request: CheckoutRequest) -> ProductDescriptor:
    """
    Derive the parent-facing product for a checkout request.

    Naming:
        subscription with tier    -> "{tier} (monthly credits)"
        subscription without tier -> "Subscription (monthly credits)"
        one-time                  -> "Coffee x{amount}"
    where "monthly" follows the requested interval.

    Raises:
        ValidationException: If the amount rounds to zero cents
    """
    price_cents = amount_to_cents(request.amount)
    if price_cents <= 0:
        raise ValidationException(
            "Invalid amount: must be at least 0.01",
            field="amount",
        )

    if request.is_subscription:
        label = request.tier or "Subscription"
        name = f"{label} ({request.interval.adverb} credits)"
        description = "Recurring support converted to credits"
    else:
        name = f"{ONE_TIME_PRODUCT_LABEL} x{request.amount.normalize():f}"
        description = "One-time support converted to credits"

    return ProductDescriptor(
        name=name,
        description=description,
        price_cents=price_cents,
    )
