# =============================================================================
# app/handlers/foo.py - Foo Handlers
# =============================================================================
# HTTP adapter for the "foo" vertical. It only knows FooService; the
# repository below it is out of reach by construction.
#
# Operations follow the common handler's shape:
#   async def op(self, ctx: RequestContext, payload: SomeRequest) -> SomeResponse
# and are bound to paths in app/router.py.
# =============================================================================

from typing import Protocol

from core.services.foo_service import FooService


class FooHandler(Protocol):
    """Operations exposed by the foo handler."""


class _FooHandler:

    def __init__(self, service: FooService):
        self._service = service


def new_foo_handler(service: FooService) -> FooHandler:
    return _FooHandler(service)
