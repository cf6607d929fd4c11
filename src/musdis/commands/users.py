"""Command group: user registration and lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from musdis.domain.requests import SignUpRequest
from musdis.services._helpers import parse_request

if TYPE_CHECKING:
    from musdis.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  musdis user sign-up alice alice@example.com
  musdis --json user show 4f1c0d2e9a8b4c7d""",
)
def user() -> None:
    """Register users and look up user info."""


@user.command("sign-up")
@click.argument("user_name")
@click.argument("email")
@click.password_option(help="Account password (prompted when omitted).")
@click.pass_obj
def sign_up(app: AppContext, user_name: str, email: str, password: str) -> None:
    """Register a new user account."""
    from musdis.services.users import UserService

    data = {"user_name": user_name, "email": email, "password": password}
    result = parse_request(SignUpRequest, data).bind(UserService(app.catalog).sign_up)
    app.emit(result, op="sign_up")


@user.command()
@click.argument("user_id")
@click.pass_obj
def show(app: AppContext, user_id: str) -> None:
    """Show the public info of a user by ID."""
    from musdis.services.users import UserService

    app.emit(UserService(app.catalog).get_user_info(user_id), op="get_user_info")
