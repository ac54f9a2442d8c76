from __future__ import annotations

from gateway.api.routes.admin import router as admin_router
from gateway.api.routes.health import router as health_router
from gateway.api.routes.maintenance import router as maintenance_router

__all__ = ["admin_router", "health_router", "maintenance_router"]
