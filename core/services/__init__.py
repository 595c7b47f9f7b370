# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .foo_service import FooService, new_foo_service

__all__ = [
    "FooService",
    "new_foo_service",
]
