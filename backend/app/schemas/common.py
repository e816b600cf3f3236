"""
WorshipDeck Backend - Shared Response Schemas
==============================================

What:  Response shapes shared by every resource router.
Why:   Status-text outcomes ("Song updated", "Slide added.") and errors use
       one consistent JSON envelope across the API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Human-readable outcome of a mutation that returns no row."""
    message: str = Field(description="Outcome description")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "A similar song already exists",
            "details": {"similar_to": "Amazing Grace", "score": 0.82},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class PingResponse(BaseModel):
    """Liveness probe answer; never touches the database."""
    status: str = Field(default="ok")
    timestamp: datetime = Field(description="Server time (UTC)")


class HealthResponse(BaseModel):
    """
    What:  Readiness probe showing service and storage status.

    A backend that cannot reach its SQLite file is effectively down, so
    the database probe decides the overall status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
