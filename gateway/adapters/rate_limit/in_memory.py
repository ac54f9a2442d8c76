"""In-memory fixed-window rate limit store.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: keys are hashed onto shards, each guarded by its own lock, so
  the read-check-increment for one key is atomic without serializing
  unrelated keys.
- Records are kept until ``sweep_expired`` is called; without sweeping the
  map grows with the number of distinct client keys.
"""

from __future__ import annotations

import threading
import zlib
from dataclasses import dataclass, field

from gateway.adapters.rate_limit.base import (
    AbstractRateLimitStore,
    RateLimitDecision,
    RateLimitRecord,
)


@dataclass
class _Shard:
    lock: threading.Lock = field(default_factory=threading.Lock)
    records: dict[str, RateLimitRecord] = field(default_factory=dict)


class InMemoryFixedWindowStore(AbstractRateLimitStore):
    """Fixed-window counter keyed by client identity.

    A window starts at the first request of a key (not at a wall-clock
    boundary) and lasts ``window_seconds``. The first request after
    ``reset_time`` overwrites the record with a fresh window. Because windows
    are fixed, a client can get up to ``2 * limit`` requests through around a
    window boundary.
    """

    def __init__(
        self,
        *,
        limit: int = 100,
        window_seconds: int = 60,
        shards: int = 16,
    ) -> None:
        """Initialize the store.

        Args:
            limit: Maximum number of allowed requests per window.
            window_seconds: Size of the fixed window in seconds.
            shards: Number of independently locked partitions.

        Raises:
            ValueError: If any argument is < 1.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")
        if shards < 1:
            raise ValueError("shards must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._shards = [_Shard() for _ in range(shards)]

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def __len__(self) -> int:
        return sum(len(shard.records) for shard in self._shards)

    def _shard_for(self, key: str) -> _Shard:
        # crc32 keeps shard placement identical across processes and restarts
        return self._shards[zlib.crc32(key.encode()) % len(self._shards)]

    def get_record(self, key: str) -> RateLimitRecord | None:
        """Return a copy of the current record for ``key``, if any."""
        shard = self._shard_for(key)
        with shard.lock:
            record = shard.records.get(key)
            if record is None:
                return None
            return RateLimitRecord(key=record.key, count=record.count, reset_time=record.reset_time)

    def check_and_increment(self, key: str, now: float) -> RateLimitDecision:
        """Count one request for ``key`` and decide whether it is allowed.

        Args:
            key: Client identity.
            now: Current UNIX time in seconds.

        Returns:
            RateLimitDecision with the allowance and the remaining quota.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        shard = self._shard_for(key)
        with shard.lock:
            record = shard.records.get(key)

            if record is None or now > record.reset_time:
                record = RateLimitRecord(key=key, count=1, reset_time=now + self._window_seconds)
                shard.records[key] = record
                return self._decision(True, self._limit - 1, record.reset_time)

            if record.count >= self._limit:
                return self._decision(False, 0, record.reset_time)

            record.count += 1
            return self._decision(True, self._limit - record.count, record.reset_time)

    def sweep_expired(self, now: float) -> int:
        removed = 0
        for shard in self._shards:
            with shard.lock:
                expired = [k for k, r in shard.records.items() if now > r.reset_time]
                for k in expired:
                    del shard.records[k]
                removed += len(expired)
        return removed

    def _decision(self, allowed: bool, remaining: int, reset_time: float) -> RateLimitDecision:
        return RateLimitDecision(
            allowed=allowed,
            limit=self._limit,
            remaining=remaining,
            reset_time=reset_time,
            retry_after_seconds=None if allowed else self._window_seconds,
        )
