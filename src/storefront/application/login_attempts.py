"""Application service: login attempt tracking for the authentication flow.

The caller checks before verifying credentials, then reports the outcome:

    check = service.check(email)
    if not check.allowed:
        reject(check.message)
    elif credentials_ok:
        service.succeed(email)
    else:
        reject(service.fail(email).message)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from storefront.application.dto import (
    LoginCheckDTO,
    LoginConfigDTO,
    LoginFailureDTO,
    LoginStatusDTO,
)
from storefront.domain.exceptions import InvalidInput
from storefront.domain.model.login_attempts import Blocked
from storefront.domain.service.login_attempt_guard import LoginAttemptGuard


def normalize_identifier(raw: str) -> str:
    """Strip whitespace; emails are matched case-insensitively."""
    identifier = (raw or "").strip()
    if not identifier:
        raise InvalidInput("Login identifier (email or IP address) is required")
    if "@" in identifier:
        identifier = identifier.lower()
    return identifier


class LoginAttemptService:

    def __init__(
        self,
        guard: LoginAttemptGuard,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._guard = guard
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def check(self, identifier: str) -> LoginCheckDTO:
        result = self._guard.check_blocked(normalize_identifier(identifier))
        if isinstance(result, Blocked):
            until = self._clock() + timedelta(seconds=result.retry_after_seconds)
            return LoginCheckDTO(
                allowed=False,
                remaining_attempts=0,
                retry_after_seconds=result.retry_after_seconds,
                blocked_until=until.isoformat(),
                message=(
                    "Too many failed login attempts. "
                    f"Please try again in {result.minutes_left} minute(s)."
                ),
            )
        return LoginCheckDTO(allowed=True, remaining_attempts=result.remaining_attempts)

    def fail(self, identifier: str) -> LoginFailureDTO:
        record = self._guard.record_failure(normalize_identifier(identifier))
        if record is None:
            # store down: nothing counted
            return LoginFailureDTO(
                recorded=False,
                attempts=0,
                remaining_attempts=self._guard.policy.max_attempts,
                blocked=False,
                message="Invalid credentials.",
            )
        if record.will_block:
            message = (
                "Account temporarily locked due to too many failed login attempts. "
                f"Please try again in {self._guard.policy.block_minutes} minute(s)."
            )
        else:
            message = f"Invalid credentials. {record.remaining} attempt(s) remaining."
        return LoginFailureDTO(
            recorded=True,
            attempts=record.new_count,
            remaining_attempts=record.remaining,
            blocked=record.will_block,
            message=message,
        )

    def succeed(self, identifier: str) -> None:
        self._guard.record_success(normalize_identifier(identifier))

    def unblock(self, identifier: str) -> bool:
        return self._guard.unblock(normalize_identifier(identifier))

    def status(self, identifier: str) -> LoginStatusDTO | None:
        identifier = normalize_identifier(identifier)
        status = self._guard.status(identifier)
        if status is None:
            return None
        return LoginStatusDTO(
            identifier=identifier,
            blocked=status.blocked,
            attempts=status.attempts,
            remaining_attempts=status.remaining,
            blocked_for_seconds=status.blocked_for,
            unblock_at=status.unblock_at.isoformat() if status.unblock_at else None,
        )

    def config(self) -> LoginConfigDTO:
        policy = self._guard.policy
        return LoginConfigDTO(
            max_attempts=policy.max_attempts,
            window_seconds=policy.window_seconds,
            block_seconds=policy.block_seconds,
            block_minutes=policy.block_minutes,
        )
