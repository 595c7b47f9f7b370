# =============================================================================
# app/context.py - Per-Request Context
# =============================================================================
# Every handler operation receives a RequestContext as its first argument.
# It carries request metadata and lets lower layers notice a client that
# went away, so long-running work can be abandoned.
# =============================================================================

from dataclasses import dataclass, field
from uuid import uuid4

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class RequestContext:
    """Read-only view of the request an operation is serving."""

    request_id: str
    method: str
    path: str
    client_host: str | None = None
    _request: Request | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        return cls(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
            _request=request,
        )

    async def is_disconnected(self) -> bool:
        """
        Check whether the client has dropped the connection.

        Services and repositories should poll this between I/O steps and
        stop early when it returns True.
        """
        if self._request is None:
            return False
        return await self._request.is_disconnected()
