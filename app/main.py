# =============================================================================
# app/main.py - Process Entrypoint
# =============================================================================
# Configures logging, builds the dependency graph and starts the server.
#
# Usage:
#   api-server                                   # console script
#   python -m app.main
#   uvicorn app.main:create_app --factory --reload
# =============================================================================

import logging
import sys

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.di import initialize_api
from lib.utils import CompositionError, StartupError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging once for the process."""
    level = logging.INFO
    if settings is not None:
        level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app() -> FastAPI:
    """
    App factory for uvicorn --factory.

    Raises CompositionError if the graph cannot be built, so uvicorn exits
    before binding.
    """
    server = initialize_api()
    return server.build_app()


def main() -> None:
    try:
        settings = get_settings()
    except Exception as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings)

    try:
        server = initialize_api(settings_provider=lambda: settings)
        server.start()
    except (CompositionError, StartupError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
