"""Request models for catalog and identity operations.

Pydantic only checks shapes (types, presence). Business rules live in
each model's ``check()`` which returns a :class:`ValidationResult`
with every violation, in field order.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from musdis.domain.validation import (
    ValidationResult,
    Violations,
    check_date,
    check_email,
    check_ids,
    check_name,
    check_password,
    check_slug_reference,
    check_url,
    check_user_name,
)


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Releases
# ---------------------------------------------------------------------------


class TrackInfo(_Request):
    """A track declared inline with a new release.

    ``artist_ids`` defaults to the release artists when omitted.
    """

    title: str
    artist_ids: list[str] | None = None
    tag_slugs: list[str] = Field(default_factory=list)


class CreateReleaseRequest(_Request):
    name: str
    release_type_slug: str
    release_date: str
    cover_url: str
    artist_ids: list[str]
    tracks: list[TrackInfo]

    def check(self) -> ValidationResult:
        v = Violations()
        v.extend(check_name(self.name, "Name"))
        v.extend(check_slug_reference(self.release_type_slug, "ReleaseTypeSlug"))
        v.extend(check_date(self.release_date, "ReleaseDate"))
        v.extend(check_url(self.cover_url, "CoverUrl"))
        v.extend(check_ids(self.artist_ids, "ArtistIds"))
        v.require(bool(self.tracks), "Tracks must contain at least one track.")
        for i, track in enumerate(self.tracks):
            v.extend(check_name(track.title, f"Tracks[{i}].Title"))
            if track.artist_ids is not None:
                v.extend(check_ids(track.artist_ids, f"Tracks[{i}].ArtistIds"))
        return v.result()


class UpdateReleaseRequest(_Request):
    """Partial update: only supplied (non-None) fields are applied."""

    name: str | None = None
    release_type_slug: str | None = None
    release_date: str | None = None
    cover_url: str | None = None
    artist_ids: list[str] | None = None

    def check(self) -> ValidationResult:
        v = Violations()
        if self.name is not None:
            v.extend(check_name(self.name, "Name"))
        if self.release_type_slug is not None:
            v.extend(check_slug_reference(self.release_type_slug, "ReleaseTypeSlug"))
        if self.release_date is not None:
            v.extend(check_date(self.release_date, "ReleaseDate"))
        if self.cover_url is not None:
            v.extend(check_url(self.cover_url, "CoverUrl"))
        if self.artist_ids is not None:
            v.extend(check_ids(self.artist_ids, "ArtistIds"))
        return v.result()


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------


class CreateTrackRequest(_Request):
    title: str
    release_id: str
    artist_ids: list[str]
    tag_slugs: list[str] = Field(default_factory=list)

    def check(self) -> ValidationResult:
        v = Violations()
        v.extend(check_name(self.title, "Title"))
        v.extend(check_slug_reference(self.release_id, "ReleaseId"))
        v.extend(check_ids(self.artist_ids, "ArtistIds"))
        return v.result()


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------


class CreateArtistRequest(_Request):
    name: str
    artist_type_slug: str
    cover_url: str

    def check(self) -> ValidationResult:
        v = Violations()
        v.extend(check_name(self.name, "Name"))
        v.extend(check_slug_reference(self.artist_type_slug, "ArtistTypeSlug"))
        v.extend(check_url(self.cover_url, "CoverUrl"))
        return v.result()


class UpdateArtistRequest(_Request):
    name: str | None = None
    artist_type_slug: str | None = None
    cover_url: str | None = None

    def check(self) -> ValidationResult:
        v = Violations()
        if self.name is not None:
            v.extend(check_name(self.name, "Name"))
        if self.artist_type_slug is not None:
            v.extend(check_slug_reference(self.artist_type_slug, "ArtistTypeSlug"))
        if self.cover_url is not None:
            v.extend(check_url(self.cover_url, "CoverUrl"))
        return v.result()


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class CreateTagRequest(_Request):
    name: str

    def check(self) -> ValidationResult:
        v = Violations()
        v.extend(check_name(self.name, "Name"))
        return v.result()


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class SignUpRequest(_Request):
    """User registration data. The password is only ever hashed, never stored."""

    user_name: str
    email: str
    password: str = Field(repr=False)

    def check(self, *, password_min_length: int = 8) -> ValidationResult:
        v = Violations()
        v.extend(check_user_name(self.user_name))
        v.extend(check_email(self.email))
        v.extend(check_password(self.password, password_min_length))
        return v.result()
