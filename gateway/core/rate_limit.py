"""Rate limiting helpers shared by the request gate.

This module wires the rate limit store adapter into the HTTP layer.

Strategy:
- Fixed-window counter per client key, API paths only.
- Client key is the first hop of X-Forwarded-For; requests without it share
  the ``"unknown"`` bucket.
"""

from __future__ import annotations

import hashlib
from typing import Mapping

from gateway.adapters.rate_limit.base import AbstractRateLimitStore
from gateway.adapters.rate_limit.in_memory import InMemoryFixedWindowStore
from gateway.core.config import RateLimitSettings, settings

FORWARDED_FOR_HEADER = "x-forwarded-for"
UNKNOWN_CLIENT_KEY = "unknown"


def build_rate_limit_store(rate_limit_settings: RateLimitSettings | None = None) -> AbstractRateLimitStore:
    """Build the default in-memory store from settings.

    Args:
        rate_limit_settings: Optional settings; defaults to global settings.

    Returns:
        AbstractRateLimitStore: A fresh, empty store.
    """

    cfg = rate_limit_settings or settings.rate_limit
    return InMemoryFixedWindowStore(
        limit=cfg.requests,
        window_seconds=cfg.window_seconds,
        shards=cfg.shards,
    )


def client_key_from_headers(headers: Mapping[str, str]) -> str:
    """Derive the rate limit key from the forwarded-for header.

    Examples:
        >>> client_key_from_headers({"x-forwarded-for": "203.0.113.7, 10.0.0.1"})
        '203.0.113.7'
        >>> client_key_from_headers({})
        'unknown'
        >>> client_key_from_headers({"x-forwarded-for": " , 10.0.0.1"})
        'unknown'
    """

    forwarded = headers.get(FORWARDED_FOR_HEADER)
    if not forwarded:
        return UNKNOWN_CLIENT_KEY

    first_hop = forwarded.split(",")[0].strip()
    return first_hop or UNKNOWN_CLIENT_KEY


def hash_client_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]
