# =============================================================================
# lib/supabase_client.py - Database Handle Provider
# =============================================================================
# Creates the Supabase client that repositories are constructed from.
#
# The client is built once by the composition root and handed down to each
# repository. Nothing else in the application creates or caches a client.
#
# Usage:
#   from lib.supabase_client import create_database_client
#   db = create_database_client(settings)
# =============================================================================

from __future__ import annotations

import logging

from supabase import Client, create_client

from app.config import Settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """
    Error while creating the Supabase client.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            message,
            code="CLIENT_INIT_FAILED",
            suggestion=suggestion,
        )


def create_database_client(settings: Settings) -> Client:
    """
    Create the Supabase client for the configured project.

    Uses the service_role key, which is appropriate for server-side access.

    Args:
        settings: Application settings holding SUPABASE_URL and SUPABASE_SERVICE_KEY

    Returns:
        Client: Supabase client instance

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
        ) from e

    logger.info(f"Supabase client initialized for {settings.SUPABASE_URL}")
    return client
