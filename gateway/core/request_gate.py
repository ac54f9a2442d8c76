"""Request gate: maintenance redirect, API rate limiting, security headers.

Every HTTP request passes through ``RequestGate`` before any route handler
runs. The stages execute in a fixed order:

1. Maintenance gate: while MAINTENANCE_MODE is on, anything outside the
   maintenance notice and the back-office prefix is redirected to the
   notice.
2. Rate limiter: paths under the API prefix consume one unit from the
   client's fixed-window quota; over-quota requests get a terminal 429.
3. Admin route guard: a pass-through placeholder. Back-office handlers check
   the admin credential themselves (see ``gateway.core.admin_auth``).
4. Downstream handler, then ``X-RateLimit-Remaining`` for API paths and the
   security headers for every response that got this far.

Short-circuited responses (maintenance redirect, 429) do not receive the
security headers.

Usage:
    app.middleware("http")(RequestGate(store))
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from gateway.adapters.rate_limit.base import AbstractRateLimitStore, RateLimitDecision
from gateway.core.config import (
    MaintenanceSettings,
    RateLimitSettings,
    load_maintenance_settings,
    settings,
)
from gateway.core.exception_handlers import general_exception_handler
from gateway.core.rate_limit import client_key_from_headers, hash_client_key

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"


def is_maintenance_exempt(path: str, maintenance: MaintenanceSettings) -> bool:
    """Paths that stay reachable while maintenance mode is on."""
    return path.startswith(maintenance.maintenance_path) or path.startswith(maintenance.admin_prefix)


def is_api_path(path: str, api_prefix: str) -> bool:
    return path.startswith(api_prefix)


def is_guarded_admin_path(path: str, maintenance: MaintenanceSettings) -> bool:
    """Back-office pages other than the login page."""
    return path.startswith(maintenance.admin_prefix) and not path.startswith(
        maintenance.admin_login_path
    )


def apply_security_headers(response: Response) -> Response:
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


def rate_limited_response(retry_after_seconds: int) -> JSONResponse:
    """Terminal 429 response; carries only the rate limit headers."""
    return JSONResponse(
        status_code=429,
        content={"error": "Too many requests"},
        headers={
            "Retry-After": str(retry_after_seconds),
            RATE_LIMIT_REMAINING_HEADER: "0",
        },
    )


class RequestGate:
    """HTTP middleware implementing the request gating stages.

    Args:
        store: Rate limit store shared by all requests of this app.
        rate_limit_settings: Limiter configuration; defaults to global settings.
        clock: Time source returning UNIX time in seconds.
        maintenance_loader: Returns the maintenance settings for the current
            request. Defaults to reading the process environment each time.
    """

    def __init__(
        self,
        store: AbstractRateLimitStore,
        *,
        rate_limit_settings: RateLimitSettings | None = None,
        clock: Callable[[], float] = time.time,
        maintenance_loader: Callable[[], MaintenanceSettings] = load_maintenance_settings,
    ) -> None:
        self.store = store
        self.rate_limit_settings = rate_limit_settings or settings.rate_limit
        self._clock = clock
        self._maintenance_loader = maintenance_loader
        self._last_sweep: float | None = None

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        path = request.url.path
        maintenance = self._maintenance_loader()

        if maintenance.maintenance_mode and not is_maintenance_exempt(path, maintenance):
            logger.info(
                "maintenance.redirect",
                extra={"request_path": path, "location": maintenance.maintenance_path},
            )
            return RedirectResponse(maintenance.maintenance_path, status_code=302)

        decision: RateLimitDecision | None = None
        if self.rate_limit_settings.enabled and is_api_path(path, self.rate_limit_settings.api_prefix):
            decision = self._check_rate_limit(request)
            if not decision.allowed:
                return rate_limited_response(
                    decision.retry_after_seconds or self.rate_limit_settings.window_seconds
                )

        if is_guarded_admin_path(path, maintenance):
            self._guard_admin_route(request)

        try:
            response = await call_next(request)
        except Exception as exc:
            # Render here so the 500 still gets the quota and security headers
            response = await general_exception_handler(request, exc)

        if decision is not None:
            response.headers[RATE_LIMIT_REMAINING_HEADER] = str(decision.remaining)

        return apply_security_headers(response)

    def _check_rate_limit(self, request: Request) -> RateLimitDecision:
        now = self._clock()
        self._maybe_sweep(now)

        key = client_key_from_headers(request.headers)
        decision = self.store.check_and_increment(key, now)

        if decision.allowed:
            logger.debug(
                "rate_limit.allowed",
                extra={
                    "key_hash": hash_client_key(key),
                    "limit": decision.limit,
                    "remaining": decision.remaining,
                },
            )
        else:
            logger.warning(
                "rate_limit.exceeded",
                extra={
                    "key_hash": hash_client_key(key),
                    "limit": decision.limit,
                    "request_path": request.url.path,
                    "retry_after_s": decision.retry_after_seconds,
                },
            )
        return decision

    def _maybe_sweep(self, now: float) -> None:
        interval = self.rate_limit_settings.sweep_interval_seconds
        if interval <= 0:
            return
        if self._last_sweep is None:
            self._last_sweep = now
            return
        if now - self._last_sweep < interval:
            return

        self._last_sweep = now
        removed = self.store.sweep_expired(now)
        logger.info("rate_limit.swept", extra={"removed": removed})

    def _guard_admin_route(self, request: Request) -> None:
        # No centralized check yet: each back-office handler verifies
        # x-admin-key via gateway.core.admin_auth.verify_admin_key.
        logger.debug("admin_guard.passthrough", extra={"request_path": request.url.path})
