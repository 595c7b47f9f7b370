# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the API:
# - test_config.py: Settings parsing and immutability
# - test_exceptions.py: Error taxonomy and error-translation hooks
# - test_router.py: Route table, status decoration and request validation
# - test_server.py: CORS, health check, engine errors, port binding
# - test_di.py: Composition root and process entrypoint
# - test_handlers.py: Handler operations and the Handlers aggregate
#
# Run tests with: pytest
# =============================================================================
