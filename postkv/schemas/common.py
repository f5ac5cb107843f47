"""
Common schemas used across the application.

Defines the response envelope shared by every API route, plus health
and sync acknowledgement payloads.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope wrapping every JSON API response."""

    success: bool = Field(default=True, description="False for error responses")
    data: T | None = Field(None, description="Response payload")
    error: str | None = Field(None, description="Error message")
    message: str | None = Field(None, description="Informational message")


class SyncResult(BaseModel):
    """Acknowledgement returned by the sync endpoint."""

    message: str = Field(..., description="Result message")
    key: str = Field(..., description="Logical key that was written")
    status: str = Field(..., description="Visibility slot written")
    indexed: bool = Field(..., description="Whether category indexes were updated")


class HealthStatus(BaseModel):
    """Schema for health check payload."""

    status: str = Field(..., description="Overall health status: 'healthy' or 'degraded'")
    timestamp: str = Field(..., description="Current server timestamp")
    version: str = Field(..., description="Application version")
    services: dict[str, str] = Field(
        default_factory=dict, description="Status of individual services"
    )
