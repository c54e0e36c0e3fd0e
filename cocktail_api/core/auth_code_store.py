"""In-memory store for e-mail verification codes."""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional, Tuple


class AuthCodeStore:
    """
    Thread-safe map from a scoped key to a verification code.

    Each entry expires ``ttl_seconds`` after its last ``save``. Expired entries
    are dropped lazily on read or in bulk by ``purge_expired``. A non-positive
    TTL disables expiry.
    """

    def __init__(self, ttl_seconds: float = 0, clock: Callable[[], float] = time.monotonic) -> None:
        self._codes: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def _expired(self, saved_at: float, now: float) -> bool:
        if self._ttl <= 0:
            return False
        return saved_at + self._ttl <= now

    def save(self, key: str, value: str) -> None:
        with self._lock:
            self._codes[key] = (value, self._clock())

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._codes.get(key)
            if entry is None:
                return None
            value, saved_at = entry
            if self._expired(saved_at, now):
                del self._codes[key]
                return None
            return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._codes.pop(key, None)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [k for k, (_, saved_at) in self._codes.items() if self._expired(saved_at, now)]
            for key in stale:
                del self._codes[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._codes.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)
