"""Tests for the back-office API routes.

The admin secret comes from conftest.py (ADMIN_SECRET_KEY=test-admin-secret).
"""

from fastapi.testclient import TestClient

ADMIN_HEADERS = {"x-admin-key": "test-admin-secret"}


def test_login_succeeds_with_admin_secret(client: TestClient) -> None:
    response = client.post(
        "/api/admin/login",
        json={"email": "tienda@example.com", "password": "test-admin-secret"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Login exitoso",
        "email": "tienda@example.com",
    }
    assert "set-cookie" not in response.headers


def test_login_rejects_wrong_password(client: TestClient) -> None:
    response = client.post(
        "/api/admin/login",
        json={"email": "tienda@example.com", "password": "nope"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "invalid_admin_credentials"


def test_login_requires_email_and_password(client: TestClient) -> None:
    response = client.post("/api/admin/login", json={"email": "tienda@example.com"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "missing_credentials"


def test_login_is_rate_limited(client: TestClient) -> None:
    headers = {"X-Forwarded-For": "192.0.2.44"}
    for _ in range(3):
        client.post("/api/admin/login", json={"email": "a@b.c", "password": "nope"}, headers=headers)

    response = client.post(
        "/api/admin/login",
        json={"email": "a@b.c", "password": "test-admin-secret"},
        headers=headers,
    )

    assert response.status_code == 429


def test_session_with_valid_key(client: TestClient) -> None:
    response = client.get("/api/admin/session", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"authenticated": True}
    assert response.headers["X-RateLimit-Remaining"] == "2"


def test_session_without_key_is_unauthorized(client: TestClient) -> None:
    response = client.get("/api/admin/session")

    assert response.status_code == 401
    body = response.json()
    assert body["error"]["message"] == "No autorizado"
    assert "request_id" in body["error"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_session_with_wrong_key_is_unauthorized(client: TestClient) -> None:
    response = client.get("/api/admin/session", headers={"x-admin-key": "wrong"})

    assert response.status_code == 401


def test_openapi_marks_admin_routes(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert "AdminKeyAuth" in schema["components"]["securitySchemes"]
    assert schema["paths"]["/api/admin/session"]["get"]["security"] == [{"AdminKeyAuth": []}]
    assert "security" not in schema["paths"]["/api/admin/login"]["post"]
