# =============================================================================
# app/di.py - Composition Root
# =============================================================================
# Builds the whole object graph once, before the server starts:
#
#   settings -> database -> repositories -> services -> handlers
#            -> Handlers aggregate -> APIServer
#
# Every dependency is passed explicitly to a constructor; nothing is looked up
# at request time. If any provider fails, initialize_api() raises
# CompositionError and no server object is returned.
#
# Usage:
#   from app.di import initialize_api
#   server = initialize_api()
#   server.start()
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from supabase import Client

from app.config import Settings, get_settings
from app.handlers import Handlers, new_common_handler, new_foo_handler, new_handlers
from app.server import APIServer
from core.repositories.foo_repository import FooRepository, new_foo_repository
from core.services.foo_service import FooService, new_foo_service
from lib.supabase_client import create_database_client
from lib.utils import CompositionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SettingsProvider = Callable[[], Settings]
DatabaseProvider = Callable[[Settings], Client]


# -----------------------------------------------------------------------------
# Layer Sets
# -----------------------------------------------------------------------------
# One build function per layer. Each only receives the layer directly below
# it, so a service never sees the database handle and a handler never sees a
# repository. A new vertical adds a field to each set and one line to each
# build function.

@dataclass(frozen=True)
class Repositories:
    foo: FooRepository


@dataclass(frozen=True)
class Services:
    foo: FooService


def _provide(name: str, provider: Callable[..., T], *args: Any) -> T:
    try:
        value = provider(*args)
    except Exception as e:
        logger.error(f"Composition failed at {name}: {e}")
        raise CompositionError(name, e) from e
    logger.debug(f"Built {name}")
    return value


def build_repositories(db: Client) -> Repositories:
    return Repositories(
        foo=_provide("foo repository", new_foo_repository, db),
    )


def build_services(settings: Settings, repositories: Repositories) -> Services:
    return Services(
        foo=_provide("foo service", new_foo_service, settings, repositories.foo),
    )


def build_handlers(services: Services) -> Handlers:
    common_handler = _provide("common handler", new_common_handler)
    foo_handler = _provide("foo handler", new_foo_handler, services.foo)
    return _provide("handlers", new_handlers, common_handler, foo_handler)


def initialize_api(
    settings_provider: SettingsProvider = get_settings,
    database_provider: DatabaseProvider = create_database_client,
) -> APIServer:
    """
    Build a fully wired APIServer.

    Args:
        settings_provider: Returns the application settings
        database_provider: Builds the database handle from settings

    Returns:
        APIServer ready to start()

    Raises:
        CompositionError: If any provider fails
    """
    settings = _provide("settings", settings_provider)
    db = _provide("database", database_provider, settings)
    repositories = build_repositories(db)
    services = build_services(settings, repositories)
    handlers = build_handlers(services)
    server = _provide("server", APIServer, settings, handlers)

    logger.info("Dependency graph built")
    return server
