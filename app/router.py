# =============================================================================
# app/router.py - API Route Table
# =============================================================================
# Binds (method, path) pairs to handler operations.
#
# A handler operation is an async callable:
#
#   async def op(ctx: RequestContext, payload: SomeModel | None) -> SomeModel
#
# wrap_with_status() turns it into an engine endpoint that decodes and
# validates the body (when a request model is given), runs the operation and
# serializes the result with the status code fixed at registration time.
# Errors are not handled here; they propagate to app/exceptions.py.
# =============================================================================

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.context import REQUEST_ID_HEADER, RequestContext
from app.handlers import Handlers

logger = logging.getLogger(__name__)

HandlerOperation = Callable[[RequestContext, Any], Awaitable[Any]]

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclass(frozen=True)
class RouteSpec:
    """One entry of the route table."""

    method: str
    path: str
    operation: HandlerOperation
    status_code: int
    request_model: type[BaseModel] | None = None


def _response_model_of(operation: HandlerOperation, status_code: int) -> Any:
    # Only used for the OpenAPI schema; bodyless statuses must not declare one.
    if status_code < 200 or status_code in (204, 304):
        return None
    annotation = inspect.signature(operation).return_annotation
    if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
        return annotation
    return None


def wrap_with_status(
    operation: HandlerOperation,
    status_code: int,
    request_model: type[BaseModel] | None = None,
) -> Callable[..., Awaitable[Response]]:
    """
    Adapt a handler operation into an engine endpoint.

    Args:
        operation: The handler operation to call
        status_code: Status code used for every successful response
        request_model: Pydantic model the JSON body must satisfy, if any

    Returns:
        An async endpoint whose signature tells FastAPI what to decode
    """

    async def endpoint(request: Request, payload: Any = None) -> Response:
        ctx = RequestContext.from_request(request)
        result = await operation(ctx, payload)

        headers = {REQUEST_ID_HEADER: ctx.request_id}
        if result is None:
            return Response(status_code=status_code, headers=headers)
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(result),
            headers=headers,
        )

    # FastAPI reads the signature to decide what to inject. The payload
    # parameter only exists when there is a body to validate.
    parameters = [
        inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request),
    ]
    if request_model is not None:
        parameters.append(
            inspect.Parameter("payload", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=request_model)
        )
    endpoint.__signature__ = inspect.Signature(parameters, return_annotation=Response)
    endpoint.__name__ = getattr(operation, "__name__", "endpoint")
    endpoint.__doc__ = getattr(operation, "__doc__", None)
    return endpoint


class Router:
    """
    Owns the route table and registers it on the engine.

    Adding a vertical means adding lines to register_api_routes(); the
    router itself does nothing but method/path matching and status
    decoration.
    """

    def __init__(self, engine: FastAPI, handlers: Handlers):
        self._engine = engine
        self._handlers = handlers
        self._routes: list[RouteSpec] = []

    @property
    def routes(self) -> tuple[RouteSpec, ...]:
        return tuple(self._routes)

    def add_route(
        self,
        method: str,
        path: str,
        operation: HandlerOperation,
        status_code: int,
        request_model: type[BaseModel] | None = None,
    ) -> RouteSpec:
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported method {method}; expected one of {ALLOWED_METHODS}")
        if any(r.method == method and r.path == path for r in self._routes):
            raise ValueError(f"Route already registered: {method} {path}")

        spec = RouteSpec(method, path, operation, status_code, request_model)
        self._engine.add_api_route(
            path,
            wrap_with_status(operation, status_code, request_model),
            methods=[method],
            status_code=status_code,
            response_model=_response_model_of(operation, status_code),
        )
        self._routes.append(spec)
        logger.debug(f"Registered route {method} {path} -> {status_code}")
        return spec

    def get(self, path: str, operation: HandlerOperation, status_code: int, **kwargs: Any) -> RouteSpec:
        return self.add_route("GET", path, operation, status_code, **kwargs)

    def post(self, path: str, operation: HandlerOperation, status_code: int, **kwargs: Any) -> RouteSpec:
        return self.add_route("POST", path, operation, status_code, **kwargs)

    def put(self, path: str, operation: HandlerOperation, status_code: int, **kwargs: Any) -> RouteSpec:
        return self.add_route("PUT", path, operation, status_code, **kwargs)

    def patch(self, path: str, operation: HandlerOperation, status_code: int, **kwargs: Any) -> RouteSpec:
        return self.add_route("PATCH", path, operation, status_code, **kwargs)

    def delete(self, path: str, operation: HandlerOperation, status_code: int, **kwargs: Any) -> RouteSpec:
        return self.add_route("DELETE", path, operation, status_code, **kwargs)

    # -------------------------------------------------------------------------
    # API Routes
    # -------------------------------------------------------------------------

    def register_api_routes(self) -> None:
        # Health check
        self.get("/health", self._handlers.common.health_check, 200)
