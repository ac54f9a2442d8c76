"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any gateway import so the global
settings object picks them up.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("ADMIN_SECRET_KEY", "test-admin-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("MAINTENANCE_MODE", None)

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from gateway.adapters.rate_limit.in_memory import InMemoryFixedWindowStore
from gateway.core.app_factory import create_app


class FakeTime:
    """Deterministic clock used to test window expiry."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture(autouse=True)
def _maintenance_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAINTENANCE_MODE", raising=False)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def store() -> InMemoryFixedWindowStore:
    return InMemoryFixedWindowStore(limit=3, window_seconds=60)


@pytest.fixture
def gateway_app(store: InMemoryFixedWindowStore, fake_time: FakeTime) -> FastAPI:
    """App with a small quota, a fake clock, and a few storefront-like routes."""
    app = create_app(store=store, clock=fake_time.time)

    @app.get("/api/products")
    async def list_products() -> dict:
        return {"products": []}

    @app.get("/api/orders/unavailable")
    async def orders_unavailable() -> JSONResponse:
        return JSONResponse(status_code=503, content={"error": "store unavailable"})

    @app.get("/api/orders/explode")
    async def orders_explode() -> dict:
        raise RuntimeError("record store connection reset")

    @app.get("/catalogo/explode")
    async def catalog_explode() -> dict:
        raise RuntimeError("template render failed")

    @app.get("/catalogo")
    async def catalog() -> dict:
        return {"page": "catalogo"}

    @app.get("/admin/pedidos")
    async def admin_orders_page() -> dict:
        return {"page": "admin"}

    @app.get("/admin/login")
    async def admin_login_page() -> dict:
        return {"page": "login"}

    return app


@pytest.fixture
def client(gateway_app: FastAPI) -> TestClient:
    return TestClient(gateway_app)
