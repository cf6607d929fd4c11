"""ArtistService: musicians, bands and their owners.

Only users listed in ``artist_users`` for an artist may change or delete
it. The creator is registered as the first owner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from musdis.domain.models import Artist, ArtistType
from musdis.infrastructure.database.schema import (
    artist_types,
    artist_users,
    artists,
    release_artists,
    track_artists,
)
from musdis.results import (
    ConflictError,
    ForbiddenError,
    NoContentError,
    NotFoundError,
    Result,
    ValidationError,
    ValueResult,
)
from musdis.services._helpers import new_id, rejected
from musdis.services.base import BaseService
from musdis.services.slugs import SlugGenerator
from musdis.services.tracing import logged

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row

    from musdis.domain.requests import CreateArtistRequest, UpdateArtistRequest
    from musdis.infrastructure.catalog import Catalog
    from musdis.services.identity import IdentityUserService


def _to_artist(row: Row) -> Artist:
    return Artist(
        id=row.id,
        name=row.name,
        slug=row.slug,
        cover_url=row.cover_url,
        artist_type_id=row.artist_type_id,
        creator_user_id=row.creator_user_id,
    )


def resolve_artist_ids(conn: Connection, artist_ids: list[str]) -> ValueResult[list[str]]:
    """Confirm every id exists, reporting all unknown ids at once."""
    rows = conn.execute(select(artists.c.id).where(artists.c.id.in_(artist_ids))).all()
    found = {row.id for row in rows}
    missing = [artist_id for artist_id in artist_ids if artist_id not in found]
    if missing:
        return ValidationError(
            "Some artists do not exist.",
            [f"Artist with Id = {artist_id} is not found." for artist_id in missing],
        ).to_value_result()
    return ValueResult.success(list(dict.fromkeys(artist_ids)))


def _artist_type_id(conn: Connection, slug: str) -> str | None:
    row = conn.execute(select(artist_types.c.id).where(artist_types.c.slug == slug)).first()
    return None if row is None else row.id


def _is_owner(conn: Connection, artist_id: str, user_id: str) -> bool:
    row = conn.execute(
        select(artist_users.c.user_id).where(
            artist_users.c.artist_id == artist_id,
            artist_users.c.user_id == user_id,
        )
    ).first()
    return row is not None


class ArtistService(BaseService):
    """Create, read, update and delete artists."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        identity: IdentityUserService | None = None,
        slugs: SlugGenerator | None = None,
    ) -> None:
        super().__init__(catalog)
        if identity is None:
            from musdis.services.users import UserService

            identity = UserService(catalog)
        self._identity = identity
        self._slugs = slugs or SlugGenerator(self._settings.slugs.max_attempts)

    @logged
    def create(self, request: CreateArtistRequest, creator_user_id: str) -> ValueResult[Artist]:
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot create Artist, incorrect data!", vr).to_value_result()

        user_result = self._identity.get_user_info(creator_user_id)
        if user_result.is_failure:
            return user_result.error.to_value_result()

        def _create(conn: Connection) -> ValueResult[Artist]:
            type_id = _artist_type_id(conn, request.artist_type_slug)
            if type_id is None:
                return ValidationError(
                    "Cannot create Artist, ArtistTypeSlug is invalid."
                ).to_value_result()

            slug_result = self._slugs.generate_unique(conn, "artist", request.name)
            if slug_result.is_failure:
                return slug_result.error.to_value_result()

            artist = Artist(
                id=new_id(),
                name=request.name.strip(),
                slug=slug_result.value,
                cover_url=request.cover_url,
                artist_type_id=type_id,
                creator_user_id=user_result.value.id,
            )
            conn.execute(insert(artists).values(**artist.model_dump()))
            conn.execute(
                insert(artist_users).values(artist_id=artist.id, user_id=artist.creator_user_id)
            )
            return ValueResult.success(artist)

        return self._catalog.atomic(_create)

    @logged
    def get(self, slug: str) -> ValueResult[Artist]:
        with self._catalog.read() as conn:
            row = conn.execute(select(artists).where(artists.c.slug == slug)).first()
        if row is None:
            return NotFoundError(f"Artist with slug = {slug} is not found.").to_value_result()
        return ValueResult.success(_to_artist(row))

    @logged
    def list_artists(self) -> ValueResult[list[Artist]]:
        with self._catalog.read() as conn:
            rows = conn.execute(select(artists).order_by(artists.c.slug)).all()
        return ValueResult.success([_to_artist(row) for row in rows])

    @logged
    def list_artist_types(self) -> ValueResult[list[ArtistType]]:
        """Artist types accepted by ``artist_type_slug``."""
        with self._catalog.read() as conn:
            rows = conn.execute(select(artist_types).order_by(artist_types.c.slug)).all()
        return ValueResult.success(
            [ArtistType(id=row.id, name=row.name, slug=row.slug) for row in rows]
        )

    @logged
    def update(
        self,
        artist_id: str,
        request: UpdateArtistRequest,
        user_id: str,
    ) -> ValueResult[Artist]:
        """Apply the supplied fields. Only owners may update."""
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot update Artist, incorrect data!", vr).to_value_result()

        def _update(conn: Connection) -> ValueResult[Artist]:
            row = conn.execute(select(artists).where(artists.c.id == artist_id)).first()
            if row is None:
                return NotFoundError(
                    f"Artist with Id = {artist_id} is not found."
                ).to_value_result()
            if not _is_owner(conn, artist_id, user_id):
                return ForbiddenError(
                    f"User {user_id} is not allowed to change artist {artist_id}."
                ).to_value_result()

            changes: dict[str, Any] = {}
            if request.name is not None:
                slug_result = self._slugs.generate_unique(
                    conn, "artist", request.name, exclude_id=artist_id
                )
                if slug_result.is_failure:
                    return slug_result.error.to_value_result()
                changes["name"] = request.name.strip()
                changes["slug"] = slug_result.value
            if request.artist_type_slug is not None:
                type_id = _artist_type_id(conn, request.artist_type_slug)
                if type_id is None:
                    return ValidationError(
                        "Cannot update Artist, ArtistTypeSlug is invalid."
                    ).to_value_result()
                changes["artist_type_id"] = type_id
            if request.cover_url is not None:
                changes["cover_url"] = request.cover_url

            if changes:
                conn.execute(update(artists).where(artists.c.id == artist_id).values(**changes))
            return ValueResult.success(_to_artist(row).model_copy(update=changes))

        return self._catalog.atomic(_update)

    @logged
    def delete(self, artist_id: str, user_id: str) -> Result:
        """Delete an artist without releases or tracks. Only owners may delete."""

        def _delete(conn: Connection) -> Result:
            row = conn.execute(select(artists.c.id).where(artists.c.id == artist_id)).first()
            if row is None:
                return NoContentError(
                    f"Cannot delete artist, content with Id={artist_id} not found."
                ).to_result()
            if not _is_owner(conn, artist_id, user_id):
                return ForbiddenError(
                    f"User {user_id} is not allowed to delete artist {artist_id}."
                ).to_result()

            has_release = conn.execute(
                select(release_artists.c.release_id).where(release_artists.c.artist_id == artist_id)
            ).first()
            has_track = conn.execute(
                select(track_artists.c.track_id).where(track_artists.c.artist_id == artist_id)
            ).first()
            if has_release is not None or has_track is not None:
                return ConflictError(
                    f"Artist with Id = {artist_id} still has releases or tracks."
                ).to_result()

            conn.execute(delete(artist_users).where(artist_users.c.artist_id == artist_id))
            conn.execute(delete(artists).where(artists.c.id == artist_id))
            return Result.success()

        return self._catalog.atomic(_delete)
