"""End-to-end tests for the click CLI, with JSON files in a temp directory."""

import pytest
from click.testing import CliRunner

from storefront.application.login_attempts import LoginAttemptService
from storefront.domain.model.login_attempts import AttemptPolicy
from storefront.domain.service.login_attempt_guard import LoginAttemptGuard
from storefront.infrastructure.cli import login_commands
from storefront.infrastructure.cli.main import cli
from tests.fakes import FakeCounterStore


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {"STOREFRONT_DATA_DIR": str(tmp_path), "LOG_LEVEL": "WARNING"}

    def _run(*args: str):
        return runner.invoke(cli, list(args), env=env)

    return _run


@pytest.fixture
def store(monkeypatch):
    fake = FakeCounterStore()
    guard = LoginAttemptGuard(fake, AttemptPolicy(max_attempts=2))
    monkeypatch.setattr(login_commands, "login_attempt_service", lambda: LoginAttemptService(guard))
    return fake


def _new_cart(run) -> str:
    result = run("cart", "create")
    assert result.exit_code == 0, result.output
    return result.output.strip().rsplit(" ", 1)[-1]


class TestProductCommands:

    def test_add_and_list(self, run):
        assert run("product", "add", "--name", "Monstera", "--price", "50").exit_code == 0
        assert run("product", "add", "--name", "Bonsai", "--price", "120", "--out-of-stock").exit_code == 0
        result = run("product", "list")
        assert "Monstera" in result.output
        assert "out of stock" in result.output

    def test_duplicate_product_fails(self, run):
        run("product", "add", "--name", "Fern", "--price", "5")
        result = run("product", "add", "--name", "Fern", "--price", "6")
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_stock_toggle(self, run):
        run("product", "add", "--name", "Fern", "--price", "5")
        result = run("product", "stock", "--id", "1", "--out")
        assert "is now out of stock" in result.output


class TestCartCommands:

    def test_cart_lifecycle(self, run):
        run("product", "add", "--name", "Monstera", "--price", "50")
        run("product", "add", "--name", "Snake Plant", "--price", "30")
        session_id = _new_cart(run)

        run("cart", "add", "--session", session_id, "--product", "1")
        result = run("cart", "add", "--session", session_id, "--product", "2")
        assert result.exit_code == 0, result.output
        assert "$86.80" in result.output
        assert "Free shipping applied." in result.output

        result = run("cart", "remove", "--session", session_id, "--product", "1")
        assert "$30.00" in result.output
        assert "Add $45.00 more for free shipping." in result.output

        result = run("cart", "clear", "--session", session_id)
        assert result.exit_code == 0
        assert "Cart is empty." in run("cart", "show", "--session", session_id).output

    def test_unknown_cart(self, run):
        result = run("cart", "show", "--session", "3f1c1c1e-8f0a-4b8e-9d7a-1a2b3c4d5e6f")
        assert result.exit_code != 0
        assert "Cart not found" in result.output

    def test_quote(self, run):
        result = run("cart", "quote", "--items", "10:2")
        assert result.exit_code == 0
        assert "$31.69" in result.output

    def test_quote_rejects_negative_price(self, run):
        result = run("cart", "quote", "--items=-5:1")
        assert result.exit_code != 0
        assert "cannot be negative" in result.output

    def test_quote_rejects_bad_format(self, run):
        result = run("cart", "quote", "--items", "10")
        assert result.exit_code != 0
        assert "Expected 'Price:Quantity'" in result.output


class TestLoginCommands:

    def test_fail_then_blocked(self, run, store):
        result = run("login", "fail", "--id", "fern@example.com")
        assert "1 attempt(s) remaining" in result.output
        result = run("login", "fail", "--id", "fern@example.com")
        assert "temporarily locked" in result.output

        result = run("login", "check", "--id", "fern@example.com")
        assert result.exit_code != 0
        assert "try again in 15 minute(s)" in result.output

    def test_unblock(self, run, store):
        run("login", "fail", "--id", "fern@example.com")
        run("login", "fail", "--id", "fern@example.com")
        assert run("login", "unblock", "--id", "fern@example.com").exit_code == 0
        result = run("login", "check", "--id", "fern@example.com")
        assert result.exit_code == 0
        assert "2 attempt(s) remaining" in result.output

    def test_status_when_store_down(self, run, store):
        store.available = False
        result = run("login", "status", "--id", "fern@example.com")
        assert result.exit_code != 0
        assert "Counter store unavailable" in result.output

    def test_config(self, run, store):
        store.available = False
        result = run("login", "config")
        assert result.exit_code == 0, result.output
        assert "Max attempts:   2" in result.output
        assert "(15 minute(s))" in result.output


class TestCartCheckoutCommands:

    def test_summary(self, run):
        run("product", "add", "--name", "Fern", "--price", "10")
        session_id = _new_cart(run)
        run("cart", "add", "--session", session_id, "--product", "1", "--qty", "2")
        result = run("cart", "summary", "--session", session_id)
        assert result.exit_code == 0, result.output
        assert "(2 item(s))" in result.output
        assert "$31.69" in result.output

    def test_validate_reports_catalog_changes(self, run):
        run("product", "add", "--name", "Monstera", "--price", "50")
        run("product", "add", "--name", "Fern", "--price", "10")
        session_id = _new_cart(run)
        run("cart", "add", "--session", session_id, "--product", "1")
        run("cart", "add", "--session", session_id, "--product", "2")

        assert "Cart is valid." in run("cart", "validate", "--session", session_id).output

        run("product", "stock", "--id", "1", "--out")
        run("product", "update", "--id", "2", "--price", "12")
        result = run("cart", "validate", "--session", session_id)
        assert result.exit_code == 0, result.output
        assert "found 2 issue(s)" in result.output
        assert "[out_of_stock] Monstera is currently out of stock" in result.output
        assert "[price_change] The price of Fern has changed from $10.00 to $12.00" in result.output
        assert "Monstera" not in run("cart", "show", "--session", session_id).output
