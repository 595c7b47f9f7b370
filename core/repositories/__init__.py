# =============================================================================
# core/repositories/ - Repository Layer Exports
# =============================================================================
# One module per vertical. Each exposes a Protocol and a constructor that
# takes the database handle.
# =============================================================================

from .foo_repository import FooRepository, new_foo_repository

__all__ = [
    "FooRepository",
    "new_foo_repository",
]
