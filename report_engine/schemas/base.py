from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseResponse(BaseModel):
    """Base response schema for all API responses."""
    success: bool = True
    message: str = "Operation completed successfully"
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorDetail(BaseModel):
    """Body of an error response."""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: ErrorDetail


class HealthCheckSchema(BaseModel):
    """Schema for health check response."""
    status: str = Field(description="Health status: healthy, unhealthy, degraded")
    version: str
    timestamp: datetime = Field(default_factory=_utcnow)
