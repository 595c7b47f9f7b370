# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Error base for failures that happen outside of a request: configuration,
# database handle creation, composition and socket binding. These never reach
# the HTTP error hook; they abort the process before it serves traffic.
# =============================================================================

from typing import Any


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific (non-HTTP) errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyStartupError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_STARTUP_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


# =============================================================================
# Startup Errors
# =============================================================================

class CompositionError(ApplicationError):
    """Raised when a provider fails while building the dependency graph."""

    def __init__(self, provider: str, error: BaseException):
        super().__init__(
            message=f"Failed to build {provider}: {error}",
            code="COMPOSITION_FAILED",
            suggestion="Check the configuration and that external services are reachable",
            details={"provider": provider, "error": str(error)},
        )
        self.provider = provider


class StartupError(ApplicationError):
    """Raised when the server cannot bind its listening socket."""

    def __init__(self, host: str, port: int, error: BaseException):
        super().__init__(
            message=f"Cannot listen on {host}:{port}: {error}",
            code="STARTUP_FAILED",
            suggestion="Make sure the port is free or set PORT to another value",
            details={"host": host, "port": port, "error": str(error)},
        )
