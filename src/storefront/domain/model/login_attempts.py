"""Value types for tracking failed login attempts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class AttemptPolicy:
    """How many failures are tolerated, and for how long a breach blocks."""

    max_attempts: int = 5
    block_seconds: int = 15 * 60
    window_seconds: int = 15 * 60

    def __post_init__(self) -> None:
        for name in ("max_attempts", "block_seconds", "window_seconds"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValidationError(f"{name} must be a positive integer, got {value!r}")

    @property
    def block_minutes(self) -> int:
        return max(1, math.ceil(self.block_seconds / 60))


@dataclass(frozen=True)
class Blocked:
    """A block flag is set; every attempt is rejected until it expires."""

    retry_after_seconds: int

    @property
    def is_blocked(self) -> bool:
        return True

    @property
    def minutes_left(self) -> int:
        return max(1, math.ceil(self.retry_after_seconds / 60))


@dataclass(frozen=True)
class NotBlocked:
    remaining_attempts: int

    @property
    def is_blocked(self) -> bool:
        return False


BlockCheck = Union[Blocked, NotBlocked]


@dataclass(frozen=True)
class FailureRecord:
    """Outcome of recording one failed attempt."""

    new_count: int
    remaining: int
    will_block: bool


@dataclass(frozen=True)
class AttemptStatus:
    """Administrative snapshot of an identifier's attempt state."""

    blocked: bool
    attempts: int
    remaining: int
    blocked_for: int  # seconds
    unblock_at: datetime | None
