"""Command group: releases and their tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from musdis.domain.requests import CreateReleaseRequest, UpdateReleaseRequest
from musdis.services._helpers import parse_request
from musdis.services.releases import ReleaseService

if TYPE_CHECKING:
    from musdis.commands._context import AppContext

_RELEASE_EXAMPLES = """\b
Examples:
  musdis release create @release.json
  cat release.json | musdis release create -
  musdis release list --type album --artist 9a8b7c6d
  musdis release update 1b2c3d4e '{"release_date": "1965-06-01"}'
  musdis --json release show pastel-blues"""


@click.group(epilog=_RELEASE_EXAMPLES)
def release() -> None:
    """Create, browse, update and delete releases."""


@release.command()
@click.argument("payload")
@click.pass_obj
def create(app: AppContext, payload: str) -> None:
    """Create a release and all its tracks from a JSON PAYLOAD.

    PAYLOAD is a JSON document, ``-`` for stdin, or ``@FILE``.
    Either everything is stored or nothing is.
    """
    service = ReleaseService(app.catalog)
    result = (
        app.read_payload(payload)
        .bind(lambda data: parse_request(CreateReleaseRequest, data))
        .bind(service.create)
    )
    app.emit(result, op="create_release")


@release.command()
@click.argument("slug")
@click.pass_obj
def show(app: AppContext, slug: str) -> None:
    """Show a release by slug."""
    app.emit(ReleaseService(app.catalog).get(slug), op="get_release")


@release.command("list")
@click.option("--type", "release_type", default=None, help="Filter by release type slug.")
@click.option("--artist", "artist_id", default=None, help="Filter by artist ID.")
@click.pass_obj
def list_cmd(app: AppContext, release_type: str | None, artist_id: str | None) -> None:
    """List releases, optionally filtered."""
    result = ReleaseService(app.catalog).list_releases(
        release_type_slug=release_type, artist_id=artist_id
    )
    app.emit(result, op="list_releases")


@release.command()
@click.pass_obj
def types(app: AppContext) -> None:
    """List the accepted release type slugs."""
    app.emit(ReleaseService(app.catalog).list_release_types(), op="list_release_types")


@release.command()
@click.argument("release_id")
@click.argument("payload")
@click.pass_obj
def update(app: AppContext, release_id: str, payload: str) -> None:
    """Apply a partial JSON PAYLOAD to a release."""
    service = ReleaseService(app.catalog)
    result = (
        app.read_payload(payload)
        .bind(lambda data: parse_request(UpdateReleaseRequest, data))
        .bind(lambda request: service.update(release_id, request))
    )
    app.emit(result, op="update_release")


@release.command()
@click.argument("release_id")
@click.pass_obj
def delete(app: AppContext, release_id: str) -> None:
    """Delete a release together with its tracks."""
    app.emit(ReleaseService(app.catalog).delete(release_id), op="delete_release")
