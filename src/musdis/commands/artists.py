"""Command group: artists.

Write operations act on behalf of a user (``--as USER_ID``): the creator
becomes an owner, and only owners may update or delete the artist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from musdis.domain.requests import CreateArtistRequest, UpdateArtistRequest
from musdis.services._helpers import parse_request
from musdis.services.artists import ArtistService

if TYPE_CHECKING:
    from musdis.commands._context import AppContext

_ARTIST_EXAMPLES = """\b
Examples:
  musdis artist create '{"name": "Nina Simone", "artist_type_slug": "musician",
    "cover_url": "https://img.example.com/nina.jpg"}' --as 4f1c0d2e
  musdis artist update 9a8b7c6d '{"name": "Nina"}' --as 4f1c0d2e
  musdis artist list
  musdis --json artist show nina-simone"""

_as_user = click.option(
    "--as", "user_id", required=True, help="ID of the user performing the change."
)


@click.group(epilog=_ARTIST_EXAMPLES)
def artist() -> None:
    """Create, browse, update and delete artists."""


@artist.command()
@click.argument("payload")
@_as_user
@click.pass_obj
def create(app: AppContext, payload: str, user_id: str) -> None:
    """Create an artist from a JSON PAYLOAD (``-`` reads stdin)."""
    service = ArtistService(app.catalog)
    result = (
        app.read_payload(payload)
        .bind(lambda data: parse_request(CreateArtistRequest, data))
        .bind(lambda request: service.create(request, user_id))
    )
    app.emit(result, op="create_artist")


@artist.command()
@click.argument("slug")
@click.pass_obj
def show(app: AppContext, slug: str) -> None:
    """Show an artist by slug."""
    app.emit(ArtistService(app.catalog).get(slug), op="get_artist")


@artist.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all artists."""
    app.emit(ArtistService(app.catalog).list_artists(), op="list_artists")


@artist.command()
@click.pass_obj
def types(app: AppContext) -> None:
    """List the accepted artist type slugs."""
    app.emit(ArtistService(app.catalog).list_artist_types(), op="list_artist_types")


@artist.command()
@click.argument("artist_id")
@click.argument("payload")
@_as_user
@click.pass_obj
def update(app: AppContext, artist_id: str, payload: str, user_id: str) -> None:
    """Apply a partial JSON PAYLOAD to an artist the user owns."""
    service = ArtistService(app.catalog)
    result = (
        app.read_payload(payload)
        .bind(lambda data: parse_request(UpdateArtistRequest, data))
        .bind(lambda request: service.update(artist_id, request, user_id))
    )
    app.emit(result, op="update_artist")


@artist.command()
@click.argument("artist_id")
@_as_user
@click.pass_obj
def delete(app: AppContext, artist_id: str, user_id: str) -> None:
    """Delete an artist the user owns."""
    app.emit(ArtistService(app.catalog).delete(artist_id, user_id), op="delete_artist")
