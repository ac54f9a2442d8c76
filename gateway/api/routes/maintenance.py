from __future__ import annotations

from fastapi import APIRouter

from gateway.core.config import load_maintenance_settings
from gateway.schemas.maintenance import MaintenanceNotice

router = APIRouter(tags=["Maintenance"])


@router.get("/mantenimiento", response_model=MaintenanceNotice)
def maintenance_notice() -> MaintenanceNotice:
    """Maintenance notice; the gate redirects here while MAINTENANCE_MODE is on."""

    return MaintenanceNotice(
        maintenance=load_maintenance_settings().maintenance_mode,
        message="Estamos realizando tareas de mantenimiento. Vuelve a intentarlo en unos minutos.",
    )
