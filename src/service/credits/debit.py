"""Check-and-debit request validation."""

from typing import Any, Mapping

from src.domain.entities import DebitRequest, Identity
from src.domain.exceptions import ValidationException


def parse_cost(value: Any) -> int:
    """
    Validate a credit cost.

    Integral floats such as ``2.0`` are accepted since JSON does not
    distinguish them; booleans, fractions and non-positive values are not.

    Raises:
        ValidationException: If the cost is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationException("Invalid cost: must be a positive integer", field="cost")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationException("Invalid cost: must be a positive integer", field="cost")
    return value


def parse_debit_request(identity: Identity, payload: Mapping[str, Any]) -> DebitRequest:
    """Build a DebitRequest; metadata defaults to an empty object."""
    cost = parse_cost(payload.get("cost"))

    metadata = payload.get("metadata")
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ValidationException("Invalid metadata: must be an object", field="metadata")

    return DebitRequest(identity=identity, cost=cost, metadata=metadata)
