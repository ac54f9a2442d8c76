"""Rate limit store adapters.

The gate talks to an ``AbstractRateLimitStore``; the in-memory store is the
default and a shared store (e.g., Redis) can be dropped in behind the same
interface without touching the middleware.
"""

from gateway.adapters.rate_limit.base import (
    AbstractRateLimitStore,
    RateLimitDecision,
    RateLimitRecord,
)
from gateway.adapters.rate_limit.in_memory import InMemoryFixedWindowStore

__all__ = [
    "AbstractRateLimitStore",
    "InMemoryFixedWindowStore",
    "RateLimitDecision",
    "RateLimitRecord",
]
