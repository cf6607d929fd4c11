"""Command group: tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from musdis.domain.requests import CreateTrackRequest
from musdis.services._helpers import parse_request
from musdis.services.tracks import TrackService

if TYPE_CHECKING:
    from musdis.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  musdis track create '{"title": "Strange Fruit", "release_id": "1b2c3d4e",
    "artist_ids": ["9a8b7c6d"], "tag_slugs": ["jazz"]}'
  musdis track show 5e6f7a8b
  musdis track delete 5e6f7a8b""",
)
def track() -> None:
    """Add tracks to existing releases."""


@track.command()
@click.argument("payload")
@click.pass_obj
def create(app: AppContext, payload: str) -> None:
    """Create a track on an existing release from a JSON PAYLOAD."""
    service = TrackService(app.catalog)
    result = (
        app.read_payload(payload)
        .bind(lambda data: parse_request(CreateTrackRequest, data))
        .bind(service.create)
    )
    app.emit(result, op="create_track")


@track.command()
@click.argument("track_id")
@click.pass_obj
def show(app: AppContext, track_id: str) -> None:
    """Show a track by ID."""
    app.emit(TrackService(app.catalog).get(track_id), op="get_track")


@track.command()
@click.argument("track_id")
@click.pass_obj
def delete(app: AppContext, track_id: str) -> None:
    """Delete a track."""
    app.emit(TrackService(app.catalog).delete(track_id), op="delete_track")
