"""TrackService: tracks of a release with their artists and tags.

Pipeline: VALIDATE → RESOLVE (release, artists, tags) → SLUG → PERSIST → RESPOND

:meth:`TrackService.create_in` runs inside a caller's connection so that
a release and its tracks are written in one unit of work.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from musdis.domain.models import Track
from musdis.infrastructure.database.schema import releases, tag_tracks, tags, track_artists, tracks
from musdis.results import NoContentError, NotFoundError, Result, ValueResult
from musdis.services._helpers import new_id, rejected
from musdis.services.artists import resolve_artist_ids
from musdis.services.base import BaseService
from musdis.services.slugs import SlugGenerator
from musdis.services.tags import resolve_tag_ids
from musdis.services.tracing import logged

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from musdis.domain.requests import CreateTrackRequest
    from musdis.infrastructure.catalog import Catalog


def load_track(conn: Connection, track_id: str) -> Track | None:
    """Fetch a track with its artist ids and tag slugs (explicit joins)."""
    row = conn.execute(select(tracks).where(tracks.c.id == track_id)).first()
    if row is None:
        return None
    artist_ids = conn.execute(
        select(track_artists.c.artist_id)
        .where(track_artists.c.track_id == track_id)
        .order_by(track_artists.c.artist_id)
    ).scalars()
    tag_slugs = conn.execute(
        select(tags.c.slug)
        .join(tag_tracks, tag_tracks.c.tag_id == tags.c.id)
        .where(tag_tracks.c.track_id == track_id)
        .order_by(tags.c.slug)
    ).scalars()
    return Track(
        id=row.id,
        title=row.title,
        slug=row.slug,
        release_id=row.release_id,
        artist_ids=tuple(artist_ids),
        tag_slugs=tuple(tag_slugs),
    )


def delete_track_rows(conn: Connection, track_ids: list[str]) -> None:
    """Remove tracks together with their link rows."""
    if not track_ids:
        return
    conn.execute(delete(track_artists).where(track_artists.c.track_id.in_(track_ids)))
    conn.execute(delete(tag_tracks).where(tag_tracks.c.track_id.in_(track_ids)))
    conn.execute(delete(tracks).where(tracks.c.id.in_(track_ids)))


class TrackService(BaseService):
    """Create, read and delete tracks."""

    def __init__(self, catalog: Catalog, *, slugs: SlugGenerator | None = None) -> None:
        super().__init__(catalog)
        self._slugs = slugs or SlugGenerator(self._settings.slugs.max_attempts)

    @logged
    def create(self, request: CreateTrackRequest) -> ValueResult[Track]:
        """Create a track of an existing release in its own transaction."""
        return self._catalog.atomic(lambda conn: self.create_in(conn, request))

    def create_in(self, conn: Connection, request: CreateTrackRequest) -> ValueResult[Track]:
        """Create a track using the caller's connection (no commit)."""
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot create Track, incorrect data!", vr).to_value_result()

        release = conn.execute(
            select(releases.c.id).where(releases.c.id == request.release_id)
        ).first()
        if release is None:
            return NotFoundError(
                f"Release with Id = {request.release_id} is not found."
            ).to_value_result()

        artists_result = resolve_artist_ids(conn, request.artist_ids)
        if artists_result.is_failure:
            return artists_result.error.to_value_result()

        tags_result = resolve_tag_ids(conn, request.tag_slugs)
        if tags_result.is_failure:
            return tags_result.error.to_value_result()

        slug_result = self._slugs.generate_unique(conn, "track", request.title)
        if slug_result.is_failure:
            return slug_result.error.to_value_result()

        track = Track(
            id=new_id(),
            title=request.title.strip(),
            slug=slug_result.value,
            release_id=request.release_id,
            artist_ids=tuple(sorted(artists_result.value)),
            tag_slugs=tuple(sorted(dict.fromkeys(request.tag_slugs))),
        )
        conn.execute(
            insert(tracks).values(
                id=track.id, title=track.title, slug=track.slug, release_id=track.release_id
            )
        )
        conn.execute(
            insert(track_artists),
            [{"track_id": track.id, "artist_id": artist_id} for artist_id in track.artist_ids],
        )
        if tags_result.value:
            conn.execute(
                insert(tag_tracks),
                [{"tag_id": tag_id, "track_id": track.id} for tag_id in tags_result.value],
            )
        return ValueResult.success(track)

    @logged
    def get(self, track_id: str) -> ValueResult[Track]:
        with self._catalog.read() as conn:
            track = load_track(conn, track_id)
        if track is None:
            return NotFoundError(f"Track with Id = {track_id} is not found.").to_value_result()
        return ValueResult.success(track)

    @logged
    def delete(self, track_id: str) -> Result:
        def _delete(conn: Connection) -> Result:
            row = conn.execute(select(tracks.c.id).where(tracks.c.id == track_id)).first()
            if row is None:
                return NoContentError(
                    f"Cannot delete track, content with Id={track_id} not found."
                ).to_result()
            delete_track_rows(conn, [track_id])
            return Result.success()

        return self._catalog.atomic(_delete)
