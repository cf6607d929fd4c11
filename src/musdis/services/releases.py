"""ReleaseService: albums, singles and other releases with their tracks.

Create pipeline: VALIDATE → RELEASE TYPE → SLUG → ARTISTS → PERSIST → TRACKS → RESPOND

Every step returns a result and the first failure ends the operation
with that same error. The whole pipeline runs in one
:meth:`Catalog.atomic` unit of work, so a failing track leaves no
release row behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from musdis.domain.models import Release, ReleaseType
from musdis.domain.requests import CreateTrackRequest
from musdis.domain.validation import parse_iso_date
from musdis.infrastructure.database.schema import release_artists, release_types, releases, tracks
from musdis.results import NoContentError, NotFoundError, Result, ValidationError, ValueResult
from musdis.services._helpers import new_id, rejected
from musdis.services.artists import resolve_artist_ids
from musdis.services.base import BaseService
from musdis.services.slugs import SlugGenerator
from musdis.services.tracing import logged
from musdis.services.tracks import TrackService, delete_track_rows

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row

    from musdis.domain.requests import CreateReleaseRequest, UpdateReleaseRequest
    from musdis.infrastructure.catalog import Catalog


def _release_type_id(conn: Connection, slug: str) -> str | None:
    row = conn.execute(select(release_types.c.id).where(release_types.c.slug == slug)).first()
    return None if row is None else row.id


def _to_release(conn: Connection, row: Row) -> Release:
    artist_ids = conn.execute(
        select(release_artists.c.artist_id)
        .where(release_artists.c.release_id == row.id)
        .order_by(release_artists.c.artist_id)
    ).scalars()
    return Release(
        id=row.id,
        name=row.name,
        slug=row.slug,
        release_type_id=row.release_type_id,
        release_date=row.release_date,
        cover_url=row.cover_url,
        artist_ids=tuple(artist_ids),
    )


def _link_artists(conn: Connection, release_id: str, artist_ids: list[str]) -> None:
    conn.execute(
        insert(release_artists),
        [{"release_id": release_id, "artist_id": artist_id} for artist_id in artist_ids],
    )


class ReleaseService(BaseService):
    """Create, read, update and delete releases."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        tracks: TrackService | None = None,
        slugs: SlugGenerator | None = None,
    ) -> None:
        super().__init__(catalog)
        self._slugs = slugs or SlugGenerator(self._settings.slugs.max_attempts)
        self._tracks = tracks or TrackService(catalog, slugs=self._slugs)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @logged
    def create(self, request: CreateReleaseRequest) -> ValueResult[Release]:
        """Create a release, its artist links and all of its tracks."""
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot create Release, incorrect data!", vr).to_value_result()

        def _create(conn: Connection) -> ValueResult[Release]:
            release_type_id = _release_type_id(conn, request.release_type_slug)
            if release_type_id is None:
                return ValidationError(
                    "Cannot create Release, ReleaseTypeSlug is invalid."
                ).to_value_result()

            slug_result = self._slugs.generate_unique(conn, "release", request.name)
            if slug_result.is_failure:
                return slug_result.error.to_value_result()

            artists_result = resolve_artist_ids(conn, request.artist_ids)
            if artists_result.is_failure:
                return artists_result.error.to_value_result()
            artist_ids = sorted(artists_result.value)

            release = Release(
                id=new_id(),
                name=request.name.strip(),
                slug=slug_result.value,
                release_type_id=release_type_id,
                release_date=parse_iso_date(request.release_date),
                cover_url=request.cover_url,
                artist_ids=tuple(artist_ids),
            )
            conn.execute(
                insert(releases).values(
                    id=release.id,
                    name=release.name,
                    slug=release.slug,
                    release_type_id=release.release_type_id,
                    release_date=release.release_date.isoformat(),
                    cover_url=release.cover_url,
                )
            )
            _link_artists(conn, release.id, artist_ids)

            for info in request.tracks:
                track_result = self._tracks.create_in(
                    conn,
                    CreateTrackRequest(
                        title=info.title,
                        release_id=release.id,
                        artist_ids=info.artist_ids if info.artist_ids is not None else artist_ids,
                        tag_slugs=info.tag_slugs,
                    ),
                )
                if track_result.is_failure:
                    return track_result.error.to_value_result()

            return ValueResult.success(release)

        return self._catalog.atomic(_create)

    @logged
    def update(self, release_id: str, request: UpdateReleaseRequest) -> ValueResult[Release]:
        """Apply the supplied fields of *request* to an existing release.

        Validation and existence are independent checks: a valid request
        for an unknown id still fails with NotFoundError.
        """
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot update release, incorrect data", vr).to_value_result()

        def _update(conn: Connection) -> ValueResult[Release]:
            row = conn.execute(select(releases).where(releases.c.id == release_id)).first()
            if row is None:
                return NotFoundError(
                    f"Release with Id = {release_id} is not found."
                ).to_value_result()

            changes: dict[str, Any] = {}
            if request.name is not None:
                slug_result = self._slugs.generate_unique(
                    conn, "release", request.name, exclude_id=release_id
                )
                if slug_result.is_failure:
                    return slug_result.error.to_value_result()
                changes["name"] = request.name.strip()
                changes["slug"] = slug_result.value

            if request.release_type_slug is not None:
                release_type_id = _release_type_id(conn, request.release_type_slug)
                if release_type_id is None:
                    return ValidationError(
                        "Cannot update release, release type with slug = "
                        f"{request.release_type_slug} is not found."
                    ).to_value_result()
                changes["release_type_id"] = release_type_id

            release_date = (
                parse_iso_date(request.release_date) if request.release_date is not None else None
            )
            if release_date is not None:
                changes["release_date"] = release_date.isoformat()
            if request.cover_url is not None:
                changes["cover_url"] = request.cover_url

            if changes:
                conn.execute(update(releases).where(releases.c.id == release_id).values(**changes))

            if request.artist_ids is not None:
                artists_result = resolve_artist_ids(conn, request.artist_ids)
                if artists_result.is_failure:
                    return artists_result.error.to_value_result()
                conn.execute(
                    delete(release_artists).where(release_artists.c.release_id == release_id)
                )
                _link_artists(conn, release_id, artists_result.value)

            updated = conn.execute(select(releases).where(releases.c.id == release_id)).one()
            return ValueResult.success(_to_release(conn, updated))

        return self._catalog.atomic(_update)

    @logged
    def delete(self, release_id: str) -> Result:
        """Delete a release with its tracks. A missing release changes nothing."""

        def _delete(conn: Connection) -> Result:
            row = conn.execute(select(releases.c.id).where(releases.c.id == release_id)).first()
            if row is None:
                return NoContentError(
                    f"Cannot delete release, content with Id={release_id} not found."
                ).to_result()

            track_ids = list(
                conn.execute(select(tracks.c.id).where(tracks.c.release_id == release_id)).scalars()
            )
            delete_track_rows(conn, track_ids)
            conn.execute(delete(release_artists).where(release_artists.c.release_id == release_id))
            conn.execute(delete(releases).where(releases.c.id == release_id))
            return Result.success()

        return self._catalog.atomic(_delete)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @logged
    def get(self, slug: str) -> ValueResult[Release]:
        with self._catalog.read() as conn:
            row = conn.execute(select(releases).where(releases.c.slug == slug)).first()
            if row is None:
                return NotFoundError(f"Release with slug = {slug} is not found.").to_value_result()
            return ValueResult.success(_to_release(conn, row))

    @logged
    def list_releases(
        self,
        *,
        release_type_slug: str | None = None,
        artist_id: str | None = None,
    ) -> ValueResult[list[Release]]:
        """Releases ordered by date, optionally filtered by type and artist."""
        query = select(releases)
        if release_type_slug is not None:
            query = query.join(
                release_types, release_types.c.id == releases.c.release_type_id
            ).where(release_types.c.slug == release_type_slug)
        if artist_id is not None:
            query = query.join(
                release_artists, release_artists.c.release_id == releases.c.id
            ).where(release_artists.c.artist_id == artist_id)
        query = query.order_by(releases.c.release_date, releases.c.slug)

        with self._catalog.read() as conn:
            rows = conn.execute(query).all()
            return ValueResult.success([_to_release(conn, row) for row in rows])

    @logged
    def list_release_types(self) -> ValueResult[list[ReleaseType]]:
        """Release types accepted by ``release_type_slug``."""
        with self._catalog.read() as conn:
            rows = conn.execute(select(release_types).order_by(release_types.c.slug)).all()
        return ValueResult.success(
            [ReleaseType(id=row.id, name=row.name, slug=row.slug) for row in rows]
        )
