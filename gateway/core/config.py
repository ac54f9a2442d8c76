"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Maintenance mode is the exception to "load once": it is re-read from the
process environment on every request via ``load_maintenance_settings()``.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_rate_limit_settings() -> "RateLimitSettings":
    """Build rate limit settings from environment.

    Pydantic Settings (v2) can populate values from environment variables.
    However, static type checkers often treat required fields as required
    constructor arguments, which is not how BaseSettings is intended to be used.
    """

    return RateLimitSettings()  # type: ignore[call-arg]


def _build_admin_settings() -> "AdminSettings":
    """Build admin settings from environment.

    See _build_rate_limit_settings() for rationale about the type ignore.
    """

    return AdminSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


def load_maintenance_settings() -> "MaintenanceSettings":
    """Read maintenance settings from the current process environment.

    Called once per request so toggling MAINTENANCE_MODE takes effect without
    a restart.
    """

    return MaintenanceSettings()  # type: ignore[call-arg]


class RateLimitSettings(BaseSettings):
    """Fixed-window rate limiting applied to API paths."""

    enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on API paths",
    )
    requests: int = Field(
        100,
        description="Maximum number of requests allowed per window (per client key)",
        ge=1,
    )
    window_seconds: int = Field(
        60,
        description="Rate limit window size in seconds",
        ge=1,
    )
    api_prefix: str = Field(
        "/api/",
        description="Path prefix of the routes subject to rate limiting",
    )
    shards: int = Field(
        16,
        description="Number of lock-guarded shards in the in-memory store",
        ge=1,
    )
    sweep_interval_seconds: int = Field(
        0,
        description="Seconds between sweeps of expired records (0 disables sweeping)",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class MaintenanceSettings(BaseSettings):
    """Maintenance gate configuration.

    ``maintenance_mode`` maps to the MAINTENANCE_MODE environment variable.
    """

    maintenance_mode: bool = Field(
        False,
        description="Redirect non-exempt traffic to the maintenance notice",
    )
    maintenance_path: str = Field(
        "/mantenimiento",
        description="Path of the maintenance notice (always reachable)",
    )
    admin_prefix: str = Field(
        "/admin",
        description="Back-office path prefix, exempt from maintenance redirects",
    )
    admin_login_path: str = Field(
        "/admin/login",
        description="Back-office login page, never guarded",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


class AdminSettings(BaseSettings):
    """Back-office credentials."""

    secret_key: str | None = Field(
        None,
        description="Admin secret compared against the x-admin-key header and login password",
    )

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10_485_760,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Number of rotated log files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.

    Environments:
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    rate_limit: RateLimitSettings = Field(default_factory=_build_rate_limit_settings)
    admin: AdminSettings = Field(default_factory=_build_admin_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
