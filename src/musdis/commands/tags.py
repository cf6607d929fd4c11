"""Command group: tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from musdis.domain.requests import CreateTagRequest
from musdis.services._helpers import parse_request
from musdis.services.tags import TagService

if TYPE_CHECKING:
    from musdis.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  musdis tag create "Post Rock"
  musdis tag list
  musdis --json tag show post-rock""",
)
def tag() -> None:
    """Create and browse tags."""


@tag.command()
@click.argument("name")
@click.pass_obj
def create(app: AppContext, name: str) -> None:
    """Create a tag; its slug is derived from NAME."""
    result = parse_request(CreateTagRequest, {"name": name}).bind(TagService(app.catalog).create)
    app.emit(result, op="create_tag")


@tag.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all tags."""
    app.emit(TagService(app.catalog).list_tags(), op="list_tags")


@tag.command()
@click.argument("slug")
@click.pass_obj
def show(app: AppContext, slug: str) -> None:
    """Show a tag by slug."""
    app.emit(TagService(app.catalog).get(slug), op="get_tag")
