# =============================================================================
# app/handlers/common.py - Cross-Cutting Handlers
# =============================================================================
# Operations that belong to no vertical. Currently just the health check,
# used by load balancers and monitoring.
# =============================================================================

from typing import Any, Protocol

from app.context import RequestContext
from core.models.health import HealthCheckResponse


class CommonHandler(Protocol):
    """Operations exposed by the common handler."""

    async def health_check(self, ctx: RequestContext, _: Any = None) -> HealthCheckResponse:
        ...


class _CommonHandler:

    async def health_check(self, ctx: RequestContext, _: Any = None) -> HealthCheckResponse:
        """
        Health check endpoint.

        Ignores its input and always reports {"status": "ok"}.
        """
        return HealthCheckResponse(status="ok")


def new_common_handler() -> CommonHandler:
    return _CommonHandler()
