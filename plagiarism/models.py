"""
Pydantic models for the plagiarism gateway response envelopes
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field


class CheckResponse(BaseModel):
    """Successful check envelope; also the payload stored in the cache."""
    success: bool = True
    type: Literal["url", "text"] = Field(..., description="Detected or requested input type")
    message: str
    timestamp: str = Field(..., description="ISO-8601 timestamp")
    input: str = Field(..., description="Input echo, truncated to 200 characters")
    data: Dict[str, Any] = Field(..., description="Upstream result plus local metadata")
    cached: bool = False


class ErrorResponse(BaseModel):
    """Error envelope for every failed request."""
    success: bool = False
    error: str
    message: str
    timestamp: str


class HealthResponse(BaseModel):
    success: bool = True
    status: str = "healthy"
    service: str = "plagiarism-detection"
    timestamp: str
    cache_size: int
    api_configured: bool


class StatsResponse(BaseModel):
    success: bool = True
    cache_size: int
    cache_duration_minutes: float
    rate_limit: str
    timestamp: str
    cache_hits: int = 0
    cache_misses: int = 0
