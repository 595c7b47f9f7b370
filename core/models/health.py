# =============================================================================
# core/models/health.py - Health Check Schemas
# =============================================================================
# Response body for GET /health.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class HealthCheckResponse(BaseModel):
    """
    Liveness payload returned by the health check.

    Example:
        {"status": "ok"}
    """

    model_config = ConfigDict(frozen=True)

    status: str = Field(
        ...,
        description="Always \"ok\" while the process is serving requests"
    )
