"""Admin credential checks for back-office handlers.

There is no session layer: each admin handler declares
``Depends(verify_admin_key)`` and the caller sends the admin secret in the
``x-admin-key`` header. The login endpoint checks the same secret, supplied
as the password.

Design principles:
- Pure validation logic (``validate_admin_secret``) separate from the
  FastAPI dependency so it can be tested without a request.
- Constant-time comparison against the configured secret.
- No built-in default secret: when ADMIN_SECRET_KEY is unset every admin
  request is rejected.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Annotated

from fastapi import Header

from gateway.core.config import settings
from gateway.core.errors import AuthenticationAppError

logger = logging.getLogger(__name__)


def _fingerprint(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()[:16]


def validate_admin_secret(provided: str | None) -> None:
    """Check a caller-supplied credential against the stored admin secret.

    Args:
        provided: Value from the x-admin-key header or the login password.

    Raises:
        AuthenticationAppError: If no secret is configured or the value does
            not match.
    """
    secret = settings.admin.secret_key
    if not secret:
        logger.error(
            "admin_auth.failed",
            extra={"reason": "admin_secret_not_configured"},
        )
        raise AuthenticationAppError(
            code="admin_secret_not_configured",
            message="Admin authentication is not configured",
            details={"hint": "Set the ADMIN_SECRET_KEY environment variable"},
        )

    if not provided or not hmac.compare_digest(provided.encode(), secret.encode()):
        logger.warning(
            "admin_auth.failed",
            extra={
                "reason": "invalid_admin_credentials",
                "credential_present": bool(provided),
                "credential_hash": _fingerprint(provided) if provided else None,
            },
        )
        raise AuthenticationAppError(
            code="invalid_admin_credentials",
            message="No autorizado",
        )


async def verify_admin_key(
    x_admin_key: Annotated[str | None, Header(alias="x-admin-key")] = None,
) -> None:
    """FastAPI dependency guarding a back-office handler.

    Usage:
        @router.get("/admin/session", dependencies=[Depends(verify_admin_key)])
        async def session():
            ...

    Raises:
        AuthenticationAppError: Rendered as 401 by the global error handlers.
    """
    validate_admin_secret(x_admin_key)
    logger.info(
        "admin_auth.success",
        extra={"credential_hash": _fingerprint(x_admin_key or "")},
    )
