"""Flask CLI commands for out-of-band credential provisioning."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from newsletter.services._shared.errors import ServiceError
from newsletter.services.auth import AuthService

LOGGER = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"


def _auth_service() -> AuthService:
    return AuthService(password_hasher=current_app.extensions["password_hasher"])


@click.group("users")
def users_cli() -> None:
    """Manage administrator credentials."""


@users_cli.command("create")
@click.argument("username")
@click.password_option("--password", help="Password for the new user.")
@with_appcontext
def create_command(username: str, password: str) -> None:
    """Create USERNAME with an Argon2id-hashed password."""
    service = _auth_service()
    if service.user_exists(username):
        raise click.ClickException(f"User {username!r} already exists.")
    try:
        user_id = service.provision_user(username, password)
    except ServiceError as exc:
        raise click.ClickException(f"Could not create user: {exc}") from exc
    click.echo(f"Created user {username} ({user_id})")


@users_cli.command("seed-admin")
@click.option(
    "--password",
    envvar="ADMIN_PASSWORD",
    default="everythinghastostartsomewhere",
    show_default=False,
    help="Initial password (defaults to $ADMIN_PASSWORD or a development value).",
)
@with_appcontext
def seed_admin_command(password: str) -> None:
    """Provision the default ``admin`` user unless it already exists."""
    service = _auth_service()
    if service.user_exists(DEFAULT_ADMIN_USERNAME):
        click.echo("Admin user already present; nothing to do.")
        return
    try:
        service.provision_user(DEFAULT_ADMIN_USERNAME, password)
    except ServiceError as exc:
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    LOGGER.info("Seeded default admin user", extra={"username": DEFAULT_ADMIN_USERNAME})
    click.echo(f"Created user {DEFAULT_ADMIN_USERNAME}")
