"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Short, caller-safe error message",
        examples=["Missing required identifier: project_id"],
    )
    details: str | None = Field(
        None,
        description="Upstream error body, only when explicitly enabled",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Upstream timeout"},
                {"error": "Missing required identifier: project_id"},
            ]
        }
    }
