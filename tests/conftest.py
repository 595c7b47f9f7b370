# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds settings, a fake database handle and a fully composed server
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.di import initialize_api

ALLOWED_ORIGIN = "http://a.com"
DISALLOWED_ORIGIN = "http://evil.com"


def make_settings(**overrides) -> Settings:
    """Settings independent of the developer's environment."""
    values = {
        "SUPABASE_URL": "https://test-project.supabase.co",
        "SUPABASE_SERVICE_KEY": "test-service-key",
        "PORT": "8080",
        "CORS_ALLOW_ORIGINS": ALLOWED_ORIGIN,
        "ENVIRONMENT": "development",
        "DEBUG": False,
    }
    values.update(overrides)
    return Settings(**values)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings for scenario: Port=8080, AllowOrigins=[http://a.com]."""
    return make_settings()


@pytest.fixture
def fake_db():
    """Stand-in for the Supabase client."""
    return MagicMock(name="supabase_client")


@pytest.fixture
def server(settings, fake_db):
    """A fully composed APIServer that never touches the network."""
    return initialize_api(
        settings_provider=lambda: settings,
        database_provider=lambda _: fake_db,
    )


@pytest.fixture
def client(server):
    """TestClient over the composed engine."""
    with TestClient(server.build_app()) as test_client:
        yield test_client
