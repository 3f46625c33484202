"""Check-and-debit request entity."""

from dataclasses import dataclass, field
from typing import Any, Dict

from .identity import Identity


@dataclass(frozen=True)
class DebitRequest:
    """
    A request to spend credits.

    ``cost`` is a positive integer number of credits. The parent service is
    authoritative for whether the debit succeeds.
    """

    identity: Identity
    cost: int
    metadata: Dict[str, Any] = field(default_factory=dict)
