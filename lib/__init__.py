# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains infrastructure helpers:
# - supabase_client.py: Builds the database handle repositories are made from
# - utils.py: Base error for startup/infrastructure failures
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClientError, create_database_client
from lib.utils import ApplicationError, CompositionError, StartupError

__all__ = [
    # Supabase
    "SupabaseClientError",
    "create_database_client",
    # Errors
    "ApplicationError",
    "CompositionError",
    "StartupError",
]
