"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["PROOF_INSUFFICIENT"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["income does not meet the proof threshold of 500"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
