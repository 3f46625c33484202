"""Credit operation Pydantic schemas.

Requests are parsed leniently by the service layer because identifiers
arrive under several aliases; these models document the accepted shapes.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class IdentityFieldsSchema(BaseModel):
    """Identifier fields accepted on every operation."""

    model_config = ConfigDict(extra="allow")

    user_id: Optional[str] = Field(
        None,
        description="User identifier; also accepted as userId or uid",
        examples=["user_123"],
    )
    project_id: Optional[str] = Field(
        None,
        description="Project identifier; also accepted as projectId",
        examples=["proj_456"],
    )


class CheckoutRequestSchema(IdentityFieldsSchema):
    """Schema for POST /api/credits/checkout request body."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "user_id": "user_123",
                    "project_id": "proj_456",
                    "amount": 9.99,
                    "kind": "subscription",
                    "tier": "pro-monthly",
                    "interval": "month",
                    "intervalCount": 1,
                }
            ]
        },
    )

    amount: float = Field(..., gt=0, description="Amount in dollars", examples=[9.99])
    kind: Literal["subscription", "one-time"] = Field(
        "one-time",
        description="Purchase kind; also accepted as type",
    )
    tier: Optional[str] = Field(None, description="Subscription tier label")
    interval: Literal["day", "week", "month", "year"] = "month"
    intervalCount: int = Field(1, ge=1)


class CheckoutResponseSchema(BaseModel):
    """Schema for a created checkout session."""

    success: bool = True
    url: str = Field(
        ...,
        description="Parent-issued checkout URL to redirect the user to",
        examples=["https://checkout.example.com/session/abc"],
    )


class DebitRequestSchema(IdentityFieldsSchema):
    """Schema for POST /api/credits/check-and-debit request body."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "userId": "user_123",
                    "projectId": "proj_456",
                    "cost": 5,
                    "metadata": {"feature": "image-generation"},
                }
            ]
        },
    )

    cost: int = Field(..., gt=0, description="Credits to debit")
    metadata: dict[str, Any] = Field(default_factory=dict)


class BalanceViewSchema(BaseModel):
    """Balance shape returned for ordinary users."""

    projectId: str
    creditsRemaining: int = Field(..., ge=0)
    isPaid: bool


class EarningsViewSchema(BaseModel):
    """Earnings shape returned for project creators. Amounts in cents."""

    role: Optional[str] = None
    totalEarnedCents: Optional[int] = None
    availableCents: Optional[int] = None
    pendingCents: Optional[int] = None
    last30DaysCents: Optional[int] = None
    currency: Optional[str] = None


class TransactionSchema(BaseModel):
    """A parent ledger transaction, forwarded verbatim."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    amountCents: int
    status: Literal["pending", "completed", "failed"]
    description: Optional[str] = None
    createdAt: Optional[str] = None
    currency: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class TransactionListResponseSchema(BaseModel):
    """Schema for GET /api/credits/transactions response."""

    model_config = ConfigDict(extra="allow")

    transactions: list[TransactionSchema]
    totalEarnedCents: int = Field(
        ...,
        description="Parent total, or the sum of completed transactions when absent",
    )
    totalEarnedComputed: bool = Field(
        ...,
        description="True when totalEarnedCents was derived by the gateway",
    )


def request_body_docs(schema: type[BaseModel]) -> dict:
    """OpenAPI request body for routes that parse JSON themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }
