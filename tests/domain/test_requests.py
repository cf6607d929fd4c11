"""Tests for request models and their business-rule checks."""

from __future__ import annotations

import pydantic
import pytest

from musdis.domain.requests import (
    CreateArtistRequest,
    CreateReleaseRequest,
    CreateTagRequest,
    CreateTrackRequest,
    SignUpRequest,
    TrackInfo,
    UpdateArtistRequest,
    UpdateReleaseRequest,
)


def _release(**overrides: object) -> CreateReleaseRequest:
    data: dict[str, object] = {
        "name": "Abbey Road",
        "release_type_slug": "album",
        "release_date": "1969-09-26",
        "cover_url": "https://img.example.com/abbey.jpg",
        "artist_ids": ["a1"],
        "tracks": [TrackInfo(title="Something")],
    } | overrides
    return CreateReleaseRequest(**data)  # type: ignore[arg-type]


class TestCreateReleaseRequest:
    def test_valid(self) -> None:
        vr = _release().check()
        assert vr.valid is True
        assert vr.errors == []

    def test_reports_every_violation_in_field_order(self) -> None:
        vr = _release(
            name=" ",
            release_date="26/09/1969",
            cover_url="not a url",
            artist_ids=[],
            tracks=[],
        ).check()
        assert vr.valid is False
        assert vr.errors == [
            "Name is required.",
            "ReleaseDate must be a date in YYYY-MM-DD format.",
            "CoverUrl must be an absolute http(s) URL.",
            "ArtistIds must contain at least one id.",
            "Tracks must contain at least one track.",
        ]

    def test_track_fields_checked(self) -> None:
        vr = _release(
            tracks=[TrackInfo(title="ok"), TrackInfo(title="", artist_ids=["a1", "a1"])]
        ).check()
        assert vr.errors == [
            "Tracks[1].Title is required.",
            "Tracks[1].ArtistIds must not contain duplicates.",
        ]

    def test_name_length_limit(self) -> None:
        vr = _release(name="x" * 256).check()
        assert vr.errors == ["Name must be at most 255 characters."]

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            _release(label="EMI")

    def test_frozen(self) -> None:
        request = _release()
        with pytest.raises(pydantic.ValidationError):
            request.name = "Let It Be"  # type: ignore[misc]


class TestUpdateReleaseRequest:
    def test_empty_update_is_valid(self) -> None:
        assert UpdateReleaseRequest().check().valid is True

    def test_only_supplied_fields_checked(self) -> None:
        vr = UpdateReleaseRequest(release_date="yesterday", artist_ids=["a", " "]).check()
        assert vr.errors == [
            "ReleaseDate must be a date in YYYY-MM-DD format.",
            "ArtistIds must not contain blank ids.",
        ]

    @pytest.mark.parametrize("value", ["20240115", "2024-W03-1", "2024-015", "1969-9-26"])
    def test_only_calendar_date_form_accepted(self, value: str) -> None:
        vr = UpdateReleaseRequest(release_date=value).check()
        assert vr.errors == ["ReleaseDate must be a date in YYYY-MM-DD format."]


class TestCreateTrackRequest:
    def test_valid(self) -> None:
        request = CreateTrackRequest(title="Something", release_id="r1", artist_ids=["a1"])
        assert request.check().valid is True
        assert request.tag_slugs == []

    def test_invalid(self) -> None:
        vr = CreateTrackRequest(title="", release_id="", artist_ids=[]).check()
        assert vr.errors == [
            "Title is required.",
            "ReleaseId is required.",
            "ArtistIds must contain at least one id.",
        ]


class TestArtistRequests:
    def test_create_invalid(self) -> None:
        vr = CreateArtistRequest(name="", artist_type_slug="", cover_url="ftp://x").check()
        assert vr.errors == [
            "Name is required.",
            "ArtistTypeSlug is required.",
            "CoverUrl must be an absolute http(s) URL.",
        ]

    def test_update_partial(self) -> None:
        assert UpdateArtistRequest(name="The Beatles").check().valid is True
        assert UpdateArtistRequest(cover_url="nope").check().errors == [
            "CoverUrl must be an absolute http(s) URL."
        ]


class TestCreateTagRequest:
    def test_blank_name(self) -> None:
        assert CreateTagRequest(name="  ").check().errors == ["Name is required."]


class TestSignUpRequest:
    def test_valid(self) -> None:
        request = SignUpRequest(user_name="alice", email="alice@example.com", password="s3cretpass")
        assert request.check().valid is True

    def test_collects_all_violations(self) -> None:
        vr = SignUpRequest(user_name="a!", email="alice", password="short").check()
        assert vr.errors == [
            "UserName must be 3-32 characters of letters, digits, '_', '.' or '-'.",
            "Email is not a valid email address.",
            "Password must be at least 8 characters.",
            "Password must contain a digit.",
        ]

    def test_min_length_configurable(self) -> None:
        request = SignUpRequest(user_name="alice", email="alice@example.com", password="abc123")
        assert request.check(password_min_length=6).valid is True
        assert request.check(password_min_length=12).valid is False

    def test_password_hidden_from_repr(self) -> None:
        request = SignUpRequest(user_name="alice", email="alice@example.com", password="s3cretpass")
        assert "s3cretpass" not in repr(request)
