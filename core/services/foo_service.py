# =============================================================================
# core/services/foo_service.py - Foo Business Logic
# =============================================================================
# Service for the "foo" vertical. Sits between the foo handler and the foo
# repository: it sees settings and the repository, never the database handle.
# =============================================================================

from typing import Protocol

from app.config import Settings
from core.repositories.foo_repository import FooRepository


class FooService(Protocol):
    """Capability set the foo handler may use."""


class _FooService:
    """Default FooService."""

    def __init__(self, settings: Settings, foo_repo: FooRepository):
        self._settings = settings
        self._foo_repo = foo_repo


def new_foo_service(settings: Settings, foo_repo: FooRepository) -> FooService:
    """Build the foo service from settings and its repository."""
    return _FooService(settings, foo_repo)
