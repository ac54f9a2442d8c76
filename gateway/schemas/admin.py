from __future__ import annotations

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Back-office login payload.

    Both fields are optional at the schema level so that a missing value is
    reported as a domain validation error (400) instead of FastAPI's 422.
    """

    email: str | None = Field(None, description="Administrator e-mail address")
    password: str | None = Field(None, description="Admin secret")


class AdminLoginResponse(BaseModel):
    success: bool = Field(..., description="Always true on a successful login")
    message: str = Field(..., description="Human-readable outcome")
    email: str = Field(..., description="E-mail address the admin logged in with")


class AdminSessionResponse(BaseModel):
    authenticated: bool = Field(..., description="True when x-admin-key matched the admin secret")
