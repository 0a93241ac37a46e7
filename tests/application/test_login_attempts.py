"""Tests for the login attempt application service."""

from datetime import datetime, timezone

import pytest

from storefront.application.login_attempts import LoginAttemptService, normalize_identifier
from storefront.domain.exceptions import InvalidInput
from storefront.domain.model.login_attempts import AttemptPolicy
from storefront.domain.service.login_attempt_guard import LoginAttemptGuard
from tests.fakes import FakeCounterStore

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def _setup(max_attempts: int = 5) -> tuple[LoginAttemptService, FakeCounterStore]:
    store = FakeCounterStore()
    guard = LoginAttemptGuard(store, AttemptPolicy(max_attempts=max_attempts), clock=lambda: NOW)
    return LoginAttemptService(guard, clock=lambda: NOW), store


class TestNormalizeIdentifier:

    def test_email_is_lower_cased(self):
        assert normalize_identifier("  Fern@Example.COM ") == "fern@example.com"

    def test_ip_is_kept(self):
        assert normalize_identifier("10.0.0.7") == "10.0.0.7"

    def test_blank_rejected(self):
        with pytest.raises(InvalidInput, match="required"):
            normalize_identifier("   ")


class TestLoginFlow:

    def test_check_allows_new_identifier(self):
        service, _ = _setup()
        dto = service.check("fern@example.com")
        assert dto.allowed is True
        assert dto.remaining_attempts == 5
        assert dto.message is None

    def test_failure_reports_remaining(self):
        service, _ = _setup()
        dto = service.fail("fern@example.com")
        assert dto.recorded is True
        assert dto.attempts == 1
        assert dto.remaining_attempts == 4
        assert dto.message == "Invalid credentials. 4 attempt(s) remaining."

    def test_email_case_does_not_split_counters(self):
        service, _ = _setup()
        service.fail("Fern@Example.com")
        assert service.fail("fern@example.com").attempts == 2

    def test_breach_locks_account(self):
        service, _ = _setup(max_attempts=3)
        service.fail("fern@example.com")
        service.fail("fern@example.com")
        dto = service.fail("fern@example.com")
        assert dto.blocked is True
        assert dto.remaining_attempts == 0
        assert "Please try again in 15 minute(s)" in dto.message

    def test_blocked_check_explains_wait(self):
        service, store = _setup(max_attempts=1)
        service.fail("fern@example.com")
        store.clock.advance(61)
        dto = service.check("fern@example.com")
        assert dto.allowed is False
        assert dto.remaining_attempts == 0
        assert dto.retry_after_seconds == 839
        assert dto.blocked_until == "2026-05-01T12:13:59+00:00"
        assert dto.message == "Too many failed login attempts. Please try again in 14 minute(s)."

    def test_success_resets_allowance(self):
        service, _ = _setup()
        service.fail("fern@example.com")
        service.succeed("fern@example.com")
        assert service.check("fern@example.com").remaining_attempts == 5

    def test_unblock(self):
        service, _ = _setup(max_attempts=1)
        service.fail("fern@example.com")
        assert service.unblock("fern@example.com") is True
        assert service.check("fern@example.com").allowed is True

    def test_status(self):
        service, _ = _setup(max_attempts=2)
        service.fail("fern@example.com")
        service.fail("fern@example.com")
        dto = service.status("FERN@example.com")
        assert dto.identifier == "fern@example.com"
        assert dto.blocked is True
        assert dto.blocked_for_seconds == 900
        assert dto.unblock_at == "2026-05-01T12:15:00+00:00"


class TestStoreOutage:

    def test_check_fails_open(self):
        service, store = _setup()
        store.available = False
        assert service.check("fern@example.com").allowed is True

    def test_failure_not_recorded(self):
        service, store = _setup()
        store.available = False
        dto = service.fail("fern@example.com")
        assert dto.recorded is False
        assert dto.blocked is False
        assert dto.message == "Invalid credentials."

    def test_status_unavailable(self):
        service, store = _setup()
        store.available = False
        assert service.status("fern@example.com") is None


class TestConfig:

    def test_reports_active_policy(self):
        service, _ = _setup(max_attempts=3)
        dto = service.config()
        assert dto.max_attempts == 3
        assert dto.window_seconds == 900
        assert dto.block_seconds == 900
        assert dto.block_minutes == 15

    def test_does_not_touch_the_store(self):
        service, store = _setup()
        store.available = False
        assert service.config().max_attempts == 5
