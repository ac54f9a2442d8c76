"""Tests for global exception handlers.

Validates that domain errors map to the right HTTP status codes, that the
error envelope is consistent, and that unexpected errors leak nothing.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gateway.core.errors import AppError, AuthenticationAppError, ValidationAppError
from gateway.core.exception_handlers import (
    general_exception_handler,
    setup_exception_handlers,
    status_code_for,
)


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/validation")
    async def validation_endpoint():
        raise ValidationAppError(
            code="missing_credentials",
            message="Email y contraseña son requeridos",
            details={"hint": "Send both email and password"},
        )

    @app.get("/auth")
    async def auth_endpoint():
        raise AuthenticationAppError(code="invalid_admin_credentials", message="No autorizado")

    return app


@pytest.fixture
def handler_client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


@pytest.mark.parametrize(
    "exc,expected",
    [
        (AppError(code="x", message="x"), 400),
        (ValidationAppError(code="x", message="x"), 400),
        (AuthenticationAppError(code="x", message="x"), 401),
    ],
)
def test_status_code_mapping(exc: AppError, expected: int) -> None:
    assert status_code_for(exc) == expected


def test_validation_error_returns_400_with_details(handler_client: TestClient) -> None:
    response = handler_client.get("/validation")

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "missing_credentials"
    assert error["details"] == {"hint": "Send both email and password"}
    assert "request_id" in error


def test_authentication_error_returns_401_without_details(handler_client: TestClient) -> None:
    response = handler_client.get("/auth")

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "invalid_admin_credentials"
    assert "details" not in error


def test_general_exception_handler_hides_internals() -> None:
    request = MagicMock()
    request.url.path = "/api/orders"
    request.method = "GET"

    exc = RuntimeError("connection to record store failed: password=hunter2")
    response = asyncio.run(general_exception_handler(request, exc))

    body = response.body.decode()
    data = json.loads(body)
    assert response.status_code == 500
    assert data["error"]["code"] == "internal_server_error"
    assert "record store" not in body
    assert "hunter2" not in body
    assert "RuntimeError" not in body


def test_setup_registers_domain_and_fallback_handlers(app_with_handlers: FastAPI) -> None:
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
