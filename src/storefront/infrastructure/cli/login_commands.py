"""CLI commands for login attempt tracking.

These drive the same service the authentication handler uses, which makes
them handy for support staff inspecting or lifting a lockout.
"""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import login_attempt_service

_identifier_option = click.option(
    "--id", "identifier", required=True, help="Email address or IP address."
)


@click.command("check")
@_identifier_option
def login_check(identifier: str) -> None:
    """Check whether a login attempt would be allowed."""
    try:
        dto = login_attempt_service().check(identifier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.allowed:
        raise click.ClickException(dto.message or "Blocked")
    click.echo(f"Allowed ({dto.remaining_attempts} attempt(s) remaining).")


@click.command("fail")
@_identifier_option
def login_fail(identifier: str) -> None:
    """Record a failed login attempt."""
    try:
        dto = login_attempt_service().fail(identifier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(dto.message)


@click.command("succeed")
@_identifier_option
def login_succeed(identifier: str) -> None:
    """Record a successful login (clears the failure counter)."""
    try:
        login_attempt_service().succeed(identifier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Failed attempts cleared for {identifier}.")


@click.command("unblock")
@_identifier_option
def login_unblock(identifier: str) -> None:
    """Lift a lockout and reset the failure counter."""
    try:
        unblocked = login_attempt_service().unblock(identifier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not unblocked:
        raise click.ClickException("Counter store unavailable; nothing was changed.")
    click.echo(f"{identifier} unblocked.")


@click.command("status")
@_identifier_option
def login_status(identifier: str) -> None:
    """Show failed attempts and lockout state."""
    try:
        dto = login_attempt_service().status(identifier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        raise click.ClickException("Counter store unavailable.")

    click.echo(f"Identifier: {dto.identifier}")
    click.echo(f"Attempts:   {dto.attempts} ({dto.remaining_attempts} remaining)")
    if dto.blocked:
        click.echo(f"Blocked:    yes, for {dto.blocked_for_seconds}s (until {dto.unblock_at})")
    else:
        click.echo("Blocked:    no")


@click.command("config")
def login_config() -> None:
    """Show the active lockout policy."""
    dto = login_attempt_service().config()

    click.echo(f"Max attempts:   {dto.max_attempts}")
    click.echo(f"Attempt window: {dto.window_seconds}s")
    click.echo(f"Block duration: {dto.block_seconds}s ({dto.block_minutes} minute(s))")
    click.echo("Identifiers are blocked after reaching max attempts within the window.")
