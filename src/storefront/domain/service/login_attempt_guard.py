"""Domain service: Login Attempt Guard.

Tracks failed logins per identifier (email or IP address) in a counter
store with expiry, and blocks the identifier for a cool-down period once
the failure threshold is reached.

Two keys per identifier:
  ``login_attempts:<id>``: failure counter, expires after the attempt window.
  ``login_blocked:<id>``:  block flag, expires after the cool-down.

When the store is unreachable the guard fails open: logins are allowed
and nothing is recorded. Every such outage is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from storefront.domain.exceptions import StoreUnavailable
from storefront.domain.model.login_attempts import (
    AttemptPolicy,
    AttemptStatus,
    BlockCheck,
    Blocked,
    FailureRecord,
    NotBlocked,
)
from storefront.domain.repository.counter_store import CounterStore

logger = logging.getLogger(__name__)

BLOCK_FLAG_VALUE = "blocked"


def attempts_key(identifier: str) -> str:
    return f"login_attempts:{identifier}"


def block_key(identifier: str) -> str:
    return f"login_blocked:{identifier}"


class LoginAttemptGuard:

    def __init__(
        self,
        store: CounterStore,
        policy: AttemptPolicy | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._policy = policy or AttemptPolicy()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def policy(self) -> AttemptPolicy:
        return self._policy

    def check_blocked(self, identifier: str) -> BlockCheck:
        """Decide whether ``identifier`` may attempt a login right now.

        Consult this before verifying credentials.
        """
        try:
            retry_after = self._block_ttl(identifier)
            if retry_after is not None:
                return Blocked(retry_after_seconds=retry_after)

            count = self._current_count(identifier)
            if count >= self._policy.max_attempts:
                # Counter overshot without a flag (e.g. policy lowered).
                self._block(identifier, count)
                return Blocked(retry_after_seconds=self._policy.block_seconds)
        except StoreUnavailable as exc:
            logger.warning("Counter store unavailable, allowing login for %s: %s", identifier, exc)
            return NotBlocked(remaining_attempts=self._policy.max_attempts)

        return NotBlocked(remaining_attempts=max(0, self._policy.max_attempts - count))

    def record_failure(self, identifier: str) -> FailureRecord | None:
        """Count one failed credential check.

        Returns None when the store is unavailable and nothing was recorded.
        An identifier that is already blocked stays blocked; its cool-down
        is not extended.
        """
        threshold = self._policy.max_attempts
        try:
            if self._store.get(block_key(identifier)) is not None:
                logger.warning("Failed login attempt for blocked identifier %s", identifier)
                return FailureRecord(new_count=threshold, remaining=0, will_block=True)

            new_count = self._store.increment(
                attempts_key(identifier), self._policy.window_seconds
            )
            will_block = new_count >= threshold
            if will_block:
                self._block(identifier, new_count)
            else:
                logger.warning(
                    "Failed login attempt for %s: %d/%d", identifier, new_count, threshold
                )
        except StoreUnavailable as exc:
            logger.warning("Counter store unavailable, failed attempt for %s not recorded: %s",
                           identifier, exc)
            return None

        return FailureRecord(
            new_count=new_count,
            remaining=max(0, threshold - new_count),
            will_block=will_block,
        )

    def record_success(self, identifier: str) -> None:
        """Clear the failure counter. An existing block flag is left alone."""
        try:
            self._store.delete(attempts_key(identifier))
        except StoreUnavailable as exc:
            logger.warning("Counter store unavailable, could not clear attempts for %s: %s",
                           identifier, exc)
            return
        logger.info("Cleared failed attempts for %s", identifier)

    def unblock(self, identifier: str) -> bool:
        """Drop both the counter and the block flag (administrative)."""
        try:
            self._store.delete(attempts_key(identifier))
            self._store.delete(block_key(identifier))
        except StoreUnavailable as exc:
            logger.warning("Counter store unavailable, could not unblock %s: %s", identifier, exc)
            return False
        logger.info("Manually unblocked %s", identifier)
        return True

    def status(self, identifier: str) -> AttemptStatus | None:
        """Snapshot for administrators; None when the store is unavailable."""
        try:
            retry_after = self._block_ttl(identifier)
            count = self._current_count(identifier)
        except StoreUnavailable as exc:
            logger.warning("Counter store unavailable, no status for %s: %s", identifier, exc)
            return None

        if retry_after is not None:
            return AttemptStatus(
                blocked=True,
                attempts=self._policy.max_attempts,
                remaining=0,
                blocked_for=retry_after,
                unblock_at=self._clock() + timedelta(seconds=retry_after),
            )
        return AttemptStatus(
            blocked=False,
            attempts=count,
            remaining=max(0, self._policy.max_attempts - count),
            blocked_for=0,
            unblock_at=None,
        )

    # --- Internal helpers -----------------------------------------------------

    def _block_ttl(self, identifier: str) -> int | None:
        """Seconds left on the block flag, or None if not blocked."""
        key = block_key(identifier)
        if self._store.get(key) is None:
            return None
        ttl = self._store.ttl_remaining(key)
        return ttl if ttl is not None else self._policy.block_seconds

    def _current_count(self, identifier: str) -> int:
        raw = self._store.get(attempts_key(identifier))
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring malformed attempt counter for %s: %r", identifier, raw)
            return 0

    def _block(self, identifier: str, count: int) -> None:
        # Set-if-absent: one flag per breach, and its expiry never moves.
        created = self._store.set(
            block_key(identifier),
            BLOCK_FLAG_VALUE,
            self._policy.block_seconds,
            only_if_absent=True,
        )
        self._store.delete(attempts_key(identifier))
        if created:
            logger.warning(
                "Blocked %s for %d seconds after %d failed attempts",
                identifier, self._policy.block_seconds, count,
            )
