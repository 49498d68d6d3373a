"""
DelipuCash Backend: Shared API Schemas
========================================

What:  Error and operational (health/ping) response models.
Why:   Clients need one error shape across every endpoint, and monitoring
       needs a stable health payload.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# camelCase on the wire, snake_case in Python. populate_by_name lets services
# build models with Python names; from_attributes lets them read ORM rows.
CAMEL_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        message: Human-readable description for display to users
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        details: Extra context (which field failed, which entity was missing,
                 and outside production the underlying failure cause)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "message": "Response not found",
            "error": "not_found",
            "details": {"resource": "response", "resource_id": "c0ffee..."},
            "requestId": "1a2b3c4d"
        }
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")

    model_config = CAMEL_MODEL_CONFIG


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for load balancers and uptime monitors.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    environment: str = Field(description="Deployment stage")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    timestamp: datetime = Field(description="Server time of the check (UTC)")

    model_config = CAMEL_MODEL_CONFIG


class PingResponse(BaseModel):
    """Liveness probe payload (no dependency checks)."""
    message: str = Field(default="pong")
    timestamp: datetime

    model_config = CAMEL_MODEL_CONFIG


class IndexResponse(BaseModel):
    """Service banner returned by GET / (endpoint discovery for clients)."""
    message: str
    status: str = Field(default="Running")
    version: str
    timestamp: datetime
    endpoints: Dict[str, str] = Field(description="Entry points by name")

    model_config = CAMEL_MODEL_CONFIG
