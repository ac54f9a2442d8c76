from __future__ import annotations

"""Application factory for the storefront gateway.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated apps with their own rate limit store and clock.
"""

import time
from typing import Callable

from fastapi import FastAPI

from gateway.adapters.rate_limit.base import AbstractRateLimitStore
from gateway.api.routes import admin_router, health_router, maintenance_router
from gateway.core.config import MaintenanceSettings, load_maintenance_settings, settings
from gateway.core.exception_handlers import setup_exception_handlers
from gateway.core.logging import configure_logging
from gateway.core.middleware import request_id_middleware
from gateway.core.openapi import apply_openapi_customizations
from gateway.core.rate_limit import build_rate_limit_store
from gateway.core.request_gate import RequestGate


def create_app(
    *,
    store: AbstractRateLimitStore | None = None,
    clock: Callable[[], float] = time.time,
    maintenance_loader: Callable[[], MaintenanceSettings] = load_maintenance_settings,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        store: Rate limit store; a fresh in-memory store when omitted.
        clock: Time source used by the rate limiter.
        maintenance_loader: Per-request source of the maintenance settings.

    Returns:
        Configured FastAPI app. The gate is exposed as ``app.state.request_gate``
        and its store as ``app.state.rate_limit_store``.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Storefront Gateway",
        description=(
            "Puerta de entrada HTTP de la tienda: modo mantenimiento, límite de "
            "peticiones por IP en /api/, cabeceras de seguridad y acceso de "
            "administración mediante la cabecera x-admin-key."
        ),
        version="0.1.0",
    )

    gate = RequestGate(
        store if store is not None else build_rate_limit_store(settings.rate_limit),
        rate_limit_settings=settings.rate_limit,
        clock=clock,
        maintenance_loader=maintenance_loader,
    )
    app.state.request_gate = gate
    app.state.rate_limit_store = gate.store

    # Middleware: the last registered runs first, so request ids wrap the gate
    app.middleware("http")(gate)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(admin_router, prefix="/api")
    app.include_router(maintenance_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
