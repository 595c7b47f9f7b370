# =============================================================================
# core/repositories/foo_repository.py - Foo Data Access
# =============================================================================
# Repository for the "foo" vertical. It is the only layer that touches the
# database handle; FooService talks to it through the FooRepository protocol.
#
# There are no operations yet. Add them to the protocol first, then to
# _FooRepository, so callers keep depending on the protocol only.
# =============================================================================

from typing import Protocol

from supabase import Client


class FooRepository(Protocol):
    """Capability set the foo service may use."""


class _FooRepository:
    """Supabase-backed FooRepository."""

    def __init__(self, db: Client):
        self._db = db


def new_foo_repository(db: Client) -> FooRepository:
    """Build the foo repository from a database handle."""
    return _FooRepository(db)
