"""Rate limit store interfaces.

The request gate depends on this abstraction (not the concrete implementation)
so the process-local store can be swapped for a shared one (e.g., Redis)
or replaced by a fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class RateLimitRecord:
    """Fixed-window counter state for one client key.

    Attributes:
        key: Client identity (first forwarded-for hop or ``"unknown"``).
        count: Requests observed in the current window.
        reset_time: UNIX time (seconds) at which the window expires.
    """

    key: str
    count: int
    reset_time: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single ``check_and_increment`` call.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window.
        remaining: Requests left in the current window (0 when denied).
        reset_time: UNIX time (seconds) when the current window expires.
        retry_after_seconds: Advertised wait when denied, None when allowed.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_time: float
    retry_after_seconds: int | None


class AbstractRateLimitStore(ABC):
    """Interface for per-key rate limit stores."""

    @abstractmethod
    def check_and_increment(self, key: str, now: float) -> RateLimitDecision:
        """Atomically decide on and record one request for ``key``.

        Args:
            key: Client identity.
            now: Current UNIX time in seconds.

        Returns:
            RateLimitDecision describing whether it was allowed.
        """
        raise NotImplementedError

    def sweep_expired(self, now: float) -> int:
        """Drop records whose window ended before ``now``.

        Stores without local state have nothing to sweep.

        Returns:
            Number of records removed.
        """
        return 0
