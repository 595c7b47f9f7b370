# =============================================================================
# tests/test_exceptions.py - Error Handling Tests
# =============================================================================
# Tests for the error taxonomy and for the single error-translation point:
# every error raised by an operation leaves the API as the same JSON shape.
# =============================================================================

import logging

import pytest
from fastapi.testclient import TestClient

from app.exceptions import (
    AppError,
    BadRequestError,
    ClientError,
    ConflictError,
    DependencyError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from tests.conftest import ALLOWED_ORIGIN


# =============================================================================
# Taxonomy
# =============================================================================

class TestErrorTaxonomy:
    """Tests for status codes and classification."""

    @pytest.mark.parametrize(
        "error_cls, status_code, code",
        [
            (BadRequestError, 400, "BAD_REQUEST"),
            (UnauthorizedError, 401, "UNAUTHORIZED"),
            (ForbiddenError, 403, "FORBIDDEN"),
            (ConflictError, 409, "CONFLICT"),
            (UnprocessableEntityError, 422, "UNPROCESSABLE_ENTITY"),
            (DependencyError, 502, "DEPENDENCY_ERROR"),
            (ServiceUnavailableError, 503, "SERVICE_UNAVAILABLE"),
        ],
    )
    def test_defaults(self, error_cls, status_code, code):
        error = error_cls("boom")
        assert error.status_code == status_code
        assert error.code == code

    def test_client_errors_are_client_errors(self):
        assert ConflictError("taken").is_client_error is True
        assert isinstance(ConflictError("taken"), ClientError)

    def test_server_errors_are_not_client_errors(self):
        error = DependencyError("database down")
        assert error.is_client_error is False
        assert isinstance(error, ServerError)

    def test_server_error_has_default_suggestion(self):
        assert ServerError("oops").suggestion is not None

    def test_client_error_rejects_5xx(self):
        with pytest.raises(ValueError):
            ClientError("nope", status_code=500)

    def test_server_error_rejects_4xx(self):
        with pytest.raises(ValueError):
            ServerError("nope", status_code=404)

    def test_not_found_details(self):
        error = NotFoundError("foo", "42")
        assert error.status_code == 404
        assert error.message == "Foo not found: 42"
        assert error.details == {"resource": "foo", "id": "42"}

    def test_to_dict_omits_empty_fields(self):
        """Only detail and code are always present."""
        assert AppError("bad", code="X", status_code=400).to_dict() == {
            "detail": "bad",
            "code": "X",
        }

    def test_to_dict_includes_suggestion_and_details(self):
        body = BadRequestError("bad", suggestion="fix it", details={"a": 1}).to_dict()
        assert body["suggestion"] == "fix it"
        assert body["details"] == {"a": 1}


# =============================================================================
# Translation
# =============================================================================

def _raising(exc: Exception):
    async def operation(ctx, _):
        raise exc
    return operation


class TestErrorTranslation:
    """Tests for the exception handlers installed on the engine."""

    def test_client_error_translated(self, server, client):
        server.router.get("/conflict", _raising(ConflictError("already exists")), 200)

        response = client.get("/conflict")

        assert response.status_code == 409
        assert response.json() == {"detail": "already exists", "code": "CONFLICT"}

    def test_server_error_translated(self, server, client):
        server.router.get("/down", _raising(ServiceUnavailableError("maintenance")), 200)

        response = client.get("/down")

        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "SERVICE_UNAVAILABLE"
        assert body["detail"] == "maintenance"
        assert "suggestion" in body

    def test_unexpected_exception_hides_internals(self, server):
        server.router.get("/crash", _raising(RuntimeError("secret stack detail")), 200)

        with TestClient(server.build_app(), raise_server_exceptions=False) as client:
            response = client.get("/crash")

        assert response.status_code == 500
        assert response.json() == {
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
        assert "secret" not in response.text

    def test_unknown_path_uses_uniform_body(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found", "code": "NOT_FOUND"}

    def test_wrong_method_uses_uniform_body(self, client):
        response = client.post("/health")

        assert response.status_code == 405
        assert response.json()["code"] == "METHOD_NOT_ALLOWED"
        assert "GET" in response.headers["allow"]

    def test_unexpected_exception_keeps_cors_headers(self, server, client):
        """A crash seen from an allowed origin is still readable by the browser."""
        server.router.get("/crash", _raising(RuntimeError("boom")), 200)

        response = client.get("/crash", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.json()["code"] == "INTERNAL_ERROR"

    def test_unexpected_exception_from_disallowed_origin(self, server, client):
        server.router.get("/crash", _raising(RuntimeError("boom")), 200)

        response = client.get("/crash", headers={"Origin": "http://evil.com"})

        assert response.status_code == 500
        assert "access-control-allow-origin" not in response.headers


# =============================================================================
# Logging
# =============================================================================

class TestErrorLogging:
    """Server-side failures keep their traceback in the log."""

    def test_server_error_logged_with_cause(self, server, client, caplog):
        async def operation(ctx, _):
            try:
                raise ConnectionError("database went away")
            except ConnectionError as e:
                raise DependencyError("could not load foo") from e

        server.router.get("/dependency", operation, 200)

        with caplog.at_level(logging.ERROR, logger="app.exceptions"):
            client.get("/dependency")

        records = [r for r in caplog.records if r.name == "app.exceptions"]
        assert len(records) == 1
        assert records[0].exc_info is not None
        assert isinstance(records[0].exc_info[1], DependencyError)
        assert isinstance(records[0].exc_info[1].__cause__, ConnectionError)

    def test_client_error_logged_without_traceback(self, server, client, caplog):
        server.router.get("/conflict", _raising(ConflictError("taken")), 200)

        with caplog.at_level(logging.INFO, logger="app.exceptions"):
            client.get("/conflict")

        records = [r for r in caplog.records if r.name == "app.exceptions"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].exc_info is None

    def test_unexpected_exception_logged_with_traceback(self, server, client, caplog):
        server.router.get("/crash", _raising(RuntimeError("boom")), 200)

        with caplog.at_level(logging.ERROR, logger="app.exceptions"):
            client.get("/crash")

        records = [r for r in caplog.records if r.name == "app.exceptions"]
        assert records and records[0].exc_info is not None
        assert isinstance(records[0].exc_info[1], RuntimeError)
