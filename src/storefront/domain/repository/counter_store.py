"""Abstract key-value store with per-key expiry.

Backs the login attempt counters and block flags. Implementations must
raise StoreUnavailable when the backing service cannot be reached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CounterStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored at ``key``, or None if absent or expired."""

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int, only_if_absent: bool = False) -> bool:
        """Store ``value`` with an expiry.

        With ``only_if_absent`` the write happens only when ``key`` does not
        exist. Returns whether the value was written.
        """

    @abstractmethod
    def increment(self, key: str, ttl_seconds: int) -> int:
        """Atomically add one to the counter at ``key`` and return the new value.

        A counter created by this call expires after ``ttl_seconds``; an
        existing counter keeps its expiry.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is a no-op."""

    @abstractmethod
    def ttl_remaining(self, key: str) -> int | None:
        """Seconds until ``key`` expires, or None if absent or without expiry."""
