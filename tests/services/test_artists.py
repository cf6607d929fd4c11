"""Tests for ArtistService: creation, ownership, updates and deletes."""

from __future__ import annotations

from sqlalchemy import select

from musdis.domain.models import UserInfo
from musdis.domain.requests import CreateArtistRequest, UpdateArtistRequest
from musdis.infrastructure.catalog import Catalog
from musdis.infrastructure.database import artist_users, seed_id
from musdis.results import (
    ConflictError,
    ForbiddenError,
    NoContentError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    ValueResult,
)
from musdis.services.artists import ArtistService, resolve_artist_ids
from tests.conftest import create_artist, create_release, sign_up


def _request(name: str = "The Beatles", **overrides: str) -> CreateArtistRequest:
    data = {"artist_type_slug": "band", "cover_url": "https://img.example.com/b.jpg"} | overrides
    return CreateArtistRequest(name=name, **data)


class _StubIdentity:
    """Identity service answering with a fixed result."""

    def __init__(self, result: ValueResult[UserInfo]) -> None:
        self.result = result
        self.calls: list[str] = []

    def get_user_info(self, user_id: str) -> ValueResult[UserInfo]:
        self.calls.append(user_id)
        return self.result


class TestCreateArtist:
    def test_creates_artist_and_owner(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = ArtistService(catalog).create(_request(), user.id).value
        assert artist.slug == "the-beatles"
        assert artist.creator_user_id == user.id
        assert artist.artist_type_id == seed_id("artist_types", "band")
        with catalog.read() as conn:
            owners = list(
                conn.execute(
                    select(artist_users.c.user_id).where(artist_users.c.artist_id == artist.id)
                ).scalars()
            )
        assert owners == [user.id]

    def test_same_name_gets_suffixed_slug(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        create_artist(catalog, "Nirvana", user)
        second = create_artist(catalog, "Nirvana", user)
        assert second.slug == "nirvana-2"

    def test_invalid_request(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).create(_request(name="", cover_url="x"), "u1")
        assert isinstance(result.error, ValidationError)
        assert result.error.description == "Cannot create Artist, incorrect data!"
        assert len(result.error.details) == 2

    def test_invalid_request_skips_identity(self, catalog: Catalog) -> None:
        identity = _StubIdentity(ValueResult.success(UserInfo(id="u", user_name="u", email="e")))
        ArtistService(catalog, identity=identity).create(_request(name=""), "u")
        assert identity.calls == []

    def test_unknown_user_propagates_identity_error(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).create(_request(), "ghost")
        assert isinstance(result.error, NotFoundError)
        assert result.error.description == "User with Id = ghost is not found."

    def test_identity_error_passed_through_unchanged(self, catalog: Catalog) -> None:
        error = UnauthorizedError("Token expired.")
        identity = _StubIdentity(error.to_value_result())
        result = ArtistService(catalog, identity=identity).create(_request(), "u1")
        assert result.error is error
        assert identity.calls == ["u1"]

    def test_unknown_artist_type(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        result = ArtistService(catalog).create(_request(artist_type_slug="orchestra"), user.id)
        assert isinstance(result.error, ValidationError)
        assert result.error.description == "Cannot create Artist, ArtistTypeSlug is invalid."


class TestArtistQueries:
    def test_get_by_slug(self, catalog: Catalog) -> None:
        artist = create_artist(catalog, "Nina Simone", sign_up(catalog))
        assert ArtistService(catalog).get("nina-simone").value == artist

    def test_get_missing(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).get("nobody")
        assert isinstance(result.error, NotFoundError)

    def test_list(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        create_artist(catalog, "Queen", user)
        create_artist(catalog, "ABBA", user)
        slugs = [a.slug for a in ArtistService(catalog).list_artists().value]
        assert slugs == ["abba", "queen"]


class TestUpdateArtist:
    def test_owner_can_rename(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = create_artist(catalog, "The Quarrymen", user)
        service = ArtistService(catalog)
        updated = service.update(artist.id, UpdateArtistRequest(name="The Beatles"), user.id).value
        assert updated.name == "The Beatles"
        assert updated.slug == "the-beatles"
        assert service.get("the-beatles").value == updated

    def test_rename_to_same_name_keeps_slug(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = create_artist(catalog, "Queen", user)
        request = UpdateArtistRequest(name="Queen")
        updated = ArtistService(catalog).update(artist.id, request, user.id).value
        assert updated.slug == "queen"

    def test_change_type(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = create_artist(catalog, "Prince", user)
        request = UpdateArtistRequest(artist_type_slug="musician")
        updated = ArtistService(catalog).update(artist.id, request, user.id).value
        assert updated.artist_type_id == seed_id("artist_types", "musician")

    def test_non_owner_forbidden(self, catalog: Catalog) -> None:
        owner = sign_up(catalog, "alice")
        other = sign_up(catalog, "bob")
        artist = create_artist(catalog, "Queen", owner)
        result = ArtistService(catalog).update(artist.id, UpdateArtistRequest(name="X"), other.id)
        assert isinstance(result.error, ForbiddenError)
        assert result.error.status == 403

    def test_missing(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).update("nope", UpdateArtistRequest(name="X"), "u1")
        assert isinstance(result.error, NotFoundError)

    def test_invalid_request(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).update("nope", UpdateArtistRequest(cover_url="x"), "u1")
        assert isinstance(result.error, ValidationError)


class TestDeleteArtist:
    def test_owner_deletes(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = create_artist(catalog, "Queen", user)
        service = ArtistService(catalog)
        assert service.delete(artist.id, user.id).is_success
        assert isinstance(service.get("queen").error, NotFoundError)

    def test_missing_is_no_content(self, catalog: Catalog) -> None:
        result = ArtistService(catalog).delete("nope", "u1")
        assert isinstance(result.error, NoContentError)
        assert result.error.status == 404
        assert result.error.description == "Cannot delete artist, content with Id=nope not found."

    def test_non_owner_forbidden(self, catalog: Catalog) -> None:
        artist = create_artist(catalog, "Queen", sign_up(catalog, "alice"))
        result = ArtistService(catalog).delete(artist.id, sign_up(catalog, "bob").id)
        assert isinstance(result.error, ForbiddenError)

    def test_artist_with_releases_is_conflict(self, catalog: Catalog) -> None:
        user = sign_up(catalog)
        artist = create_artist(catalog, "Queen", user)
        create_release(catalog, "A Night at the Opera", [artist.id])
        result = ArtistService(catalog).delete(artist.id, user.id)
        assert isinstance(result.error, ConflictError)


class TestResolveArtistIds:
    def test_reports_every_unknown_id(self, catalog: Catalog) -> None:
        artist = create_artist(catalog, "Queen", sign_up(catalog))
        with catalog.read() as conn:
            result = resolve_artist_ids(conn, ["x1", artist.id, "x2"])
        assert isinstance(result.error, ValidationError)
        assert result.error.description == "Some artists do not exist."
        assert result.error.details == (
            "Artist with Id = x1 is not found.",
            "Artist with Id = x2 is not found.",
        )


class TestArtistTypes:
    def test_seeded_types(self, catalog: Catalog) -> None:
        types = ArtistService(catalog).list_artist_types().value
        assert [t.slug for t in types] == ["band", "musician"]
        assert types[0].id == seed_id("artist_types", "band")
