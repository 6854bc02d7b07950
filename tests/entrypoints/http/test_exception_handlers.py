"""Tests for FastAPI exception handlers."""

import logging

import pytest
from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from motoin.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError,
)
from motoin.entrypoints.http.exception_handlers import register_exception_handlers


@pytest.fixture
def app() -> FastAPI:
    """Create a minimal FastAPI app with exception handlers registered."""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/validation-error")
    def raise_validation_error() -> None:
        raise ValidationError("Cannot add messages to a closed or cancelled ticket")

    @test_app.get("/validation-error-with-fields")
    def raise_validation_error_with_fields() -> None:
        raise ValidationError(
            errors=[{"field": "make", "message": "Make is required", "code": "REQUIRED"}]
        )

    @test_app.get("/not-found-error")
    def raise_not_found_error() -> None:
        raise NotFoundError("CatalogEntry", "123")

    @test_app.get("/conflict-error")
    def raise_conflict_error() -> None:
        raise ConflictError("Catalog entry 'Honda CBR' already exists")

    @test_app.get("/unauthorized-error")
    def raise_unauthorized_error() -> None:
        raise UnauthorizedError("Authentication required")

    @test_app.get("/expired-error")
    def raise_expired_error() -> None:
        raise TokenExpiredError("Token has expired")

    @test_app.get("/forbidden-error")
    def raise_forbidden_error() -> None:
        raise ForbiddenError("Admin access required")

    @test_app.get("/internal-error")
    def raise_internal_error() -> None:
        raise InternalError("Unexpected condition")

    @test_app.get("/domain-error")
    def raise_domain_error() -> None:
        raise DomainError("Generic failure")

    @test_app.get("/value-error")
    def raise_value_error() -> None:
        raise ValueError("Invalid decimal format")

    @test_app.get("/unexpected-error")
    def raise_unexpected_error() -> None:
        raise RuntimeError("Something went wrong")

    @test_app.get("/paged")
    def paged(per_page: int = Query(default=25, le=100)) -> dict:
        return {"per_page": per_page}

    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# Domain errors
# ==============================================================================


def test_validation_error_returns_422(client: TestClient) -> None:
    response = client.get("/validation-error")

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Cannot add messages to a closed or cancelled ticket",
        "code": "VALIDATION_ERROR",
    }


def test_validation_error_includes_field_errors(client: TestClient) -> None:
    response = client.get("/validation-error-with-fields")

    assert response.status_code == 422
    assert response.json()["errors"] == [
        {"field": "make", "message": "Make is required", "code": "REQUIRED"}
    ]


@pytest.mark.parametrize(
    "path, status_code, code",
    [
        ("/not-found-error", 404, "NOT_FOUND"),
        ("/conflict-error", 409, "CONFLICT"),
        ("/forbidden-error", 403, "FORBIDDEN"),
        ("/internal-error", 500, "INTERNAL_ERROR"),
        ("/domain-error", 400, "DOMAIN_ERROR"),
    ],
)
def test_domain_error_status_codes(client: TestClient, path: str, status_code: int, code: str) -> None:
    response = client.get(path)

    assert response.status_code == status_code
    assert response.json()["code"] == code
    assert "errors" not in response.json()


def test_not_found_message(client: TestClient) -> None:
    assert client.get("/not-found-error").json()["detail"] == "CatalogEntry with identifier '123' not found"


@pytest.mark.parametrize("path, code", [("/unauthorized-error", "UNAUTHORIZED"), ("/expired-error", "TOKEN_EXPIRED")])
def test_unauthorized_errors_challenge_bearer(client: TestClient, path: str, code: str) -> None:
    response = client.get(path)

    assert response.status_code == 401
    assert response.json()["code"] == code
    assert response.headers["www-authenticate"] == "Bearer"


def test_forbidden_has_no_challenge(client: TestClient) -> None:
    assert "www-authenticate" not in client.get("/forbidden-error").headers


# ==============================================================================
# Framework errors
# ==============================================================================


def test_request_validation_error_strips_location_prefix(client: TestClient) -> None:
    response = client.get("/paged?per_page=500")

    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Invalid request parameters"
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == "per_page"
    assert body["errors"][0]["code"] == "less_than_equal"


def test_value_error_returns_422(client: TestClient) -> None:
    response = client.get("/value-error")

    assert response.status_code == 422
    assert response.json() == {"detail": "Invalid decimal format", "code": "INVALID_VALUE"}


def test_unexpected_error_hides_details(client: TestClient) -> None:
    response = client.get("/unexpected-error")

    assert response.status_code == 500
    assert response.json() == {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}


# ==============================================================================
# Logging
# ==============================================================================


@pytest.mark.parametrize(
    "path, status_code",
    [
        ("/validation-error", 422),
        ("/not-found-error", 404),
        ("/unauthorized-error", 401),
        ("/internal-error", 500),
        ("/paged?per_page=500", 422),
        ("/value-error", 422),
        ("/unexpected-error", 500),
    ],
)
def test_handlers_log_with_info_enabled(
    client: TestClient, caplog: pytest.LogCaptureFixture, path: str, status_code: int
) -> None:
    caplog.set_level(logging.INFO)

    response = client.get(path)

    assert response.status_code == status_code
    assert response.json()["code"]
    record = caplog.records[-1]
    assert record.name == "motoin.entrypoints.http.exception_handlers"
    assert record.path == path.split("?")[0]


def test_domain_error_log_carries_error_message(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    client.get("/conflict-error")

    assert caplog.records[-1].error_message == "Catalog entry 'Honda CBR' already exists"
    assert caplog.records[-1].error_code == "CONFLICT"
