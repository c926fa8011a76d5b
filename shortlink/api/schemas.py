"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a short link."""
    url: str = Field(..., min_length=1, description="URL to shorten; https:// is assumed when no scheme is given")


class LinkResponse(BaseModel):
    """Response schema for link information."""
    code: str
    target_url: str
    short_url: str  # Full URL including base domain
    created_at: datetime

    class Config:
        from_attributes = True


class ComponentHealth(BaseModel):
    """Health of a single backing component."""
    status: str
    backend: Optional[str] = None
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""
    status: str
    version: str
    environment: str
    timestamp: float
    components: Dict[str, ComponentHealth]


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
