# =============================================================================
# app/server.py - HTTP Server
# =============================================================================
# APIServer owns the engine (a FastAPI application) and the listening socket.
#
# build_app() installs, in order:
#   1. the request validation hook and the error-translation hooks
#   2. the catch-all 500 middleware, then CORS for the configured allow-list
#   3. the routes from app/router.py
#
# start() binds the port and serves until uvicorn receives SIGINT/SIGTERM.
# =============================================================================

import logging
import socket
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.exceptions import UnhandledErrorMiddleware, install_exception_handlers
from app.handlers import Handlers
from app.router import ALLOWED_METHODS, Router
from lib.utils import StartupError

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["Origin", "Content-Type", "Accept", "Authorization"]


class APIServer:
    """
    HTTP server for the API.

    Holds the settings (shared) and the handler aggregate (owned). The
    engine is created on first use and reused afterwards.
    """

    def __init__(self, settings: Settings, handlers: Handlers):
        self._settings = settings
        self._handlers = handlers
        self._engine: FastAPI | None = None
        self._router: Router | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def handlers(self) -> Handlers:
        return self._handlers

    @property
    def router(self) -> Router:
        self.build_app()
        return self._router

    def build_app(self) -> FastAPI:
        """
        Create and configure the engine.

        Returns:
            FastAPI: The configured application (same instance on every call)
        """
        if self._engine is not None:
            return self._engine

        settings = self._settings

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            logger.info(f"Starting API in {settings.ENVIRONMENT} mode on port {settings.PORT}")
            logger.info(f"CORS origins: {list(settings.cors_allow_origins)}")
            yield
            logger.info("Shutting down API")

        engine = FastAPI(
            title="Clean Template API",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc",
            lifespan=lifespan,
        )

        # Validation and error translation
        install_exception_handlers(engine)

        # Uncaught exceptions become a 500 inside the CORS layer, so the
        # error body stays readable cross-origin. Must be added before CORS.
        engine.add_middleware(UnhandledErrorMiddleware)

        # CORS
        engine.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_allow_origins),
            allow_methods=list(ALLOWED_METHODS),
            allow_credentials=True,
            allow_headers=CORS_ALLOW_HEADERS,
        )

        router = Router(engine, self._handlers)
        router.register_api_routes()

        self._engine = engine
        self._router = router
        return engine

    def _bind_socket(self) -> socket.socket:
        host = self._settings.API_HOST
        port = self._settings.port_number
        family = socket.AF_INET6 if ":" in host else socket.AF_INET

        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError as e:
            sock.close()
            raise StartupError(host, port, e) from e
        sock.set_inheritable(True)
        return sock

    def start(self) -> None:
        """
        Bind the configured port and serve requests.

        Blocks until the process is asked to stop.

        Raises:
            StartupError: If the port cannot be bound
        """
        engine = self.build_app()
        config = uvicorn.Config(
            engine,
            log_level="debug" if self._settings.DEBUG else self._settings.LOG_LEVEL.lower(),
        )
        server = uvicorn.Server(config)

        sock = self._bind_socket()
        try:
            logger.info(f"Listening on {self._settings.API_HOST}:{self._settings.PORT}")
            server.run(sockets=[sock])
        finally:
            sock.close()
