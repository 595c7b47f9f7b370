# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the layers below the HTTP handlers:
# - models/: Pydantic schemas for request/response bodies
# - services/: Business logic, one module per vertical
# - repositories/: Data access, one module per vertical
#
# Services only see repositories; repositories only see the database handle.
# Code in this package should NOT import from FastAPI.
# =============================================================================
