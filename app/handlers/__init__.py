# =============================================================================
# app/handlers/ - Handler Layer
# =============================================================================
# Handlers translate HTTP requests into service calls:
# - common.py: health check
# - foo.py: the "foo" vertical (no operations yet)
#
# Handlers groups every handler so the router has a single dependency.
# =============================================================================

from dataclasses import dataclass

from app.handlers.common import CommonHandler, new_common_handler
from app.handlers.foo import FooHandler, new_foo_handler


@dataclass(frozen=True)
class Handlers:
    """All domain handlers, built once by the composition root."""

    common: CommonHandler
    foo: FooHandler


def new_handlers(common_handler: CommonHandler, foo_handler: FooHandler) -> Handlers:
    return Handlers(common=common_handler, foo=foo_handler)


__all__ = [
    "Handlers",
    "new_handlers",
    "CommonHandler",
    "new_common_handler",
    "FooHandler",
    "new_foo_handler",
]
