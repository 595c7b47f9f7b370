# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP side of the service:
# - main.py: Process entrypoint and uvicorn app factory
# - di.py: Composition root that wires every layer
# - server.py: Engine setup (middleware, error hooks) and port binding
# - router.py: Route table binding paths to handler operations
# - handlers/: HTTP adapters, one module per vertical
# - exceptions.py: Error taxonomy and the error-translation hooks
# - config.py: Environment variable loading and settings
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
