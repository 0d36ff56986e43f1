"""
Pydantic Schemas for API Request/Response

Defines the data models used in API endpoints. Field names on the wire
follow the shop widget (camelCase sessionId).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Request Schemas
# =============================================================================


class ChatRequest(BaseModel):
    """Request body for chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(
        default="",
        description="Customer message, usually Slovak",
        examples=["Hľadám kávu bez kofeínu", "Koľko stojí doprava?"],
    )
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Optional session ID for conversation continuity",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )


# =============================================================================
# Response Schemas
# =============================================================================


class ChatResponse(BaseModel):
    """Response body for chat endpoint."""

    reply: str = Field(..., description="Assistant reply text")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "reply": "Ak hľadáte kávu bez kofeínu, odporúčam:\n\n• Decaf Mushroom Coffee: https://anilab.sk/decaf",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(..., description="Error message")


# =============================================================================
# Health Check Schemas
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    ok: bool = Field(default=True)
    products: int = Field(..., description="Number of loaded catalog products")
    faq: bool = Field(..., description="Whether the FAQ configuration is loaded")
    time: str = Field(..., description="Check timestamp, ISO 8601 UTC")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "products": 12,
                "faq": True,
                "time": "2026-02-02T08:30:00+00:00",
            }
        }
    )
