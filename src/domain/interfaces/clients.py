"""External client interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class UpstreamOperation(str, Enum):
    """Parent service operations the gateway consumes."""

    BALANCE = "balance"
    CHECKOUT = "checkout"
    CHECK_AND_DEBIT = "check_and_debit"
    TRANSACTIONS = "transactions"


@dataclass(frozen=True)
class UpstreamRequest:
    """A single call to the parent service, before base URL resolution."""

    operation: str
    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    json_body: Optional[Any] = None
    inbound_headers: Mapping[str, str] = field(default_factory=dict)
    diagnostics: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """Unparsed parent response; status and body are preserved as received."""

    status_code: int
    content: bytes
    content_type: str = "application/json"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_error(self) -> bool:
        return 400 <= self.status_code <= 599

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class UpstreamClient(ABC):
    """
    Abstract client for the parent accounting service.

    Implementations never retry: debits and checkouts must not be issued
    twice on the caller's behalf.
    """

    @abstractmethod
    async def call(self, request: UpstreamRequest) -> RawResponse:
        """
        Execute one request against the parent service.

        Args:
            request: The request to send

        Returns:
            The raw response, including non-2xx responses

        Raises:
            UpstreamTimeoutException: If no response arrives within the budget
            UpstreamUnreachableException: If the network exchange fails
        """
        ...
