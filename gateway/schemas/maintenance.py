from __future__ import annotations

from pydantic import BaseModel, Field


class MaintenanceNotice(BaseModel):
    """Body served at the maintenance path."""

    maintenance: bool = Field(..., description="Whether maintenance mode is currently on")
    message: str = Field(..., description="Notice shown to shoppers")
