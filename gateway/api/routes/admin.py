from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from gateway.core.admin_auth import validate_admin_secret, verify_admin_key
from gateway.core.errors import ValidationAppError
from gateway.schemas.admin import AdminLoginRequest, AdminLoginResponse, AdminSessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminLoginResponse)
async def admin_login(payload: AdminLoginRequest) -> AdminLoginResponse:
    """Check back-office credentials.

    The password is compared against the admin secret. No session token is
    issued; subsequent admin calls send the secret in ``x-admin-key``.

    Raises:
        ValidationAppError: 400 when e-mail or password is missing.
        AuthenticationAppError: 401 when the password is wrong.
    """
    if not payload.email or not payload.password:
        raise ValidationAppError(
            code="missing_credentials",
            message="Email y contraseña son requeridos",
        )

    validate_admin_secret(payload.password)

    logger.info("admin_login.success", extra={"admin_email_domain": payload.email.rsplit("@", 1)[-1]})
    return AdminLoginResponse(success=True, message="Login exitoso", email=payload.email)


@router.get(
    "/session",
    response_model=AdminSessionResponse,
    dependencies=[Depends(verify_admin_key)],
)
async def admin_session() -> AdminSessionResponse:
    """Report whether the supplied admin credential is valid."""
    return AdminSessionResponse(authenticated=True)
