"""
Transaction aggregation for the creator view.

The parent usually sends a precomputed ``totalEarnedCents`` alongside the
transaction list. When it does not, the gateway derives one from the list.
The derived value is a display convenience; the parent's figure is
authoritative whenever present.
"""

from numbers import Number
from typing import Any, Iterable, List, Mapping, Optional

from src.domain.entities import TransactionRecord, TransactionStatus


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, Number):
        return None
    return int(value)


def parse_transaction(item: Mapping[str, Any]) -> TransactionRecord:
    """
    Read a transaction leniently.

    ``amountCents`` is preferred, ``amount_cents`` accepted. Statuses the
    gateway does not know are kept as UNKNOWN rather than rejected.
    """
    amount = _to_int(item.get("amountCents"))
    if amount is None:
        amount = _to_int(item.get("amount_cents")) or 0

    try:
        status = TransactionStatus(str(item.get("status", "")).lower())
    except ValueError:
        status = TransactionStatus.UNKNOWN

    metadata = item.get("metadata")
    record_id = item.get("id")

    return TransactionRecord(
        id=str(record_id) if record_id is not None else None,
        amount_cents=amount,
        status=status,
        created_at=item.get("createdAt", item.get("created_at")),
        description=item.get("description"),
        currency=item.get("currency"),
        metadata=metadata if isinstance(metadata, dict) else {},
    )


def parse_transactions(items: Iterable[Any]) -> List[TransactionRecord]:
    """Parse every mapping in ``items``; anything else is skipped."""
    return [parse_transaction(item) for item in items if isinstance(item, Mapping)]


def calculate_total_earned_cents(records: Iterable[TransactionRecord]) -> int:
    """
    Sum the amounts of completed transactions.

    Pending and failed transactions have not settled and are excluded.

    Example:
        [500 completed, 300 pending] -> 500
    """
    return sum(record.amount_cents for record in records if record.is_completed)


def upstream_total_earned_cents(payload: Any) -> Optional[int]:
    """The parent's precomputed total, if the payload carries one."""
    if not isinstance(payload, Mapping):
        return None
    return _to_int(payload.get("totalEarnedCents"))
