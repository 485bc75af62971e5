"""
Wardrobe Backend — Shared Response Schemas
===========================================

What:  Response bodies used by more than one resource router.
Why:   Every 201 returns the same `{message, url}` shape and every error
       returns `{message}`; defining them once keeps OpenAPI docs consistent.
"""

from pydantic import BaseModel, Field


class CreatedResponse(BaseModel):
    """
    Body of every 201 Created response.

    `url` repeats the Location header so clients that cannot read response
    headers (browser fetch without exposed headers) still learn the new URL.
    """
    message: str = Field(description="Human-readable success message")
    url: str = Field(description="Absolute URL of the created resource")


class ErrorResponse(BaseModel):
    """Standard error body for every 4xx/5xx response."""
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
