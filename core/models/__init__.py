# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request and response bodies:
# - health.py: Health check response
#
# These models define the "contract" between API and clients.
# =============================================================================

from .health import HealthCheckResponse

__all__ = [
    "HealthCheckResponse",
]
