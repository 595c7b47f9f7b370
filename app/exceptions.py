# =============================================================================
# app/exceptions.py - Error Taxonomy and Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error raised while a request is being handled ends up in one of the
# handlers at the bottom of this module, which turn it into the same JSON
# shape:
#
#   {"detail": "...", "code": "...", "suggestion": "...", "details": {...},
#    "errors": [{"field": "...", "message": "...", "type": "..."}]}
#
# Only "detail" and "code" are always present.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
# =============================================================================

import logging
from http import HTTPStatus
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base exception for errors raised while handling a request.

    Handlers, services and repositories raise subclasses of this; the
    status code decides whether the client or the server is to blame.
    """

    default_code = "APP_ERROR"
    default_status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status_code
        self.suggestion = suggestion
        self.details = details or {}

    @property
    def is_client_error(self) -> bool:
        """True when the request itself was at fault (4xx)."""
        return 400 <= self.status_code < 500

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Client Errors (4xx)
# =============================================================================

class ClientError(AppError):
    """The caller sent something we cannot act on."""

    default_code = "BAD_REQUEST"
    default_status_code = 400

    def __init__(self, message: str, **kwargs: Any):
        status_code = kwargs.get("status_code")
        if status_code is not None and not 400 <= status_code < 500:
            raise ValueError(f"ClientError needs a 4xx status code, got {status_code}")
        super().__init__(message, **kwargs)


class BadRequestError(ClientError):
    """Raised when the request is well formed but makes no sense."""


class UnauthorizedError(ClientError):
    """Raised when credentials are missing or invalid."""

    default_code = "UNAUTHORIZED"
    default_status_code = 401


class ForbiddenError(ClientError):
    """Raised when the caller may not perform the operation."""

    default_code = "FORBIDDEN"
    default_status_code = 403


class NotFoundError(ClientError):
    """Raised when a resource doesn't exist."""

    default_code = "NOT_FOUND"
    default_status_code = 404

    def __init__(self, resource: str, identifier: str, **kwargs: Any):
        kwargs.setdefault("suggestion", f"Check that the {resource} id is correct")
        kwargs.setdefault("details", {"resource": resource, "id": identifier})
        super().__init__(f"{resource.capitalize()} not found: {identifier}", **kwargs)


class ConflictError(ClientError):
    """Raised when the request conflicts with the current state."""

    default_code = "CONFLICT"
    default_status_code = 409


class UnprocessableEntityError(ClientError):
    """Raised when input passes the schema but breaks a business rule."""

    default_code = "UNPROCESSABLE_ENTITY"
    default_status_code = 422


# =============================================================================
# Server Errors (5xx)
# =============================================================================

class ServerError(AppError):
    """Something on our side failed; the request may be retried later."""

    default_code = "INTERNAL_ERROR"
    default_status_code = 500

    def __init__(self, message: str, **kwargs: Any):
        status_code = kwargs.get("status_code")
        if status_code is not None and not 500 <= status_code < 600:
            raise ValueError(f"ServerError needs a 5xx status code, got {status_code}")
        kwargs.setdefault("suggestion", "Try again later or contact support if the issue persists")
        super().__init__(message, **kwargs)


class DependencyError(ServerError):
    """Raised when a downstream dependency (database, remote API) fails."""

    default_code = "DEPENDENCY_ERROR"
    default_status_code = 502


class ServiceUnavailableError(ServerError):
    """Raised when the service cannot take requests right now."""

    default_code = "SERVICE_UNAVAILABLE"
    default_status_code = 503


# =============================================================================
# Exception Handlers
# =============================================================================

def _status_code_name(status_code: int) -> str:
    """404 -> "NOT_FOUND"."""
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "HTTP_ERROR"


def _field_path(loc: tuple | list) -> str:
    return ".".join(str(part) for part in loc)


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Convert AppError to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.is_client_error:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    else:
        logger.error(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}",
            exc_info=exc,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle errors raised by the engine itself (unknown path, wrong method).

    Keeps engine headers such as Allow on 405 responses.
    """
    detail = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": detail,
            "code": _status_code_name(exc.status_code),
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    A body that is not valid JSON is a 400; a body that decodes but breaks
    the declared constraints is a 422 listing every failing field.
    """
    raw_errors = exc.errors()
    errors = [
        {
            "field": _field_path(error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in raw_errors
    ]

    if any(error.get("type") == "json_invalid" for error in raw_errors):
        return JSONResponse(
            status_code=400,
            content={
                "detail": "Request body is not valid JSON",
                "code": "MALFORMED_REQUEST",
                "suggestion": "Send a JSON document with Content-Type: application/json",
                "errors": errors,
            }
        )

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


class UnhandledErrorMiddleware:
    """
    Turn uncaught exceptions into the uniform 500 body.

    Starlette runs the Exception handler outside every user middleware, so
    its response would skip CORS. This middleware is registered before
    CORSMiddleware, which puts it inside the CORS layer.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Too late to replace a response that is already on the wire.
            if response_started:
                raise
            response = await unhandled_exception_handler(Request(scope, receive), exc)
            await response(scope, receive, send)


def install_exception_handlers(app) -> None:
    """Register every handler above on the engine."""
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
