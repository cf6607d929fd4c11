"""Shared pytest fixtures and test helpers for musdis tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from musdis.config.models import IdentityConfig
from musdis.config.settings import MusdisSettings
from musdis.domain.models import Artist, Release, User
from musdis.domain.requests import (
    CreateArtistRequest,
    CreateReleaseRequest,
    SignUpRequest,
    TrackInfo,
)
from musdis.infrastructure.catalog import Catalog

# Keeps PBKDF2 fast in tests; production uses the config default.
TEST_HASH_ITERATIONS = 1_000


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> MusdisSettings:
    return MusdisSettings.from_cli(
        data_root=tmp_path,
        identity=IdentityConfig(hash_iterations=TEST_HASH_ITERATIONS),
    )


@pytest.fixture
def catalog(settings: MusdisSettings) -> Generator[Catalog]:
    """Fully initialized, seeded catalog on a temp directory."""
    c = Catalog(settings)
    try:
        yield c
    finally:
        c.close()


@pytest.fixture
def _isolated_data_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands against a temp data root with fast password hashing.

    Use via ``@pytest.mark.usefixtures("_isolated_data_root")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MUSDIS_CONFIG", raising=False)
    monkeypatch.setenv("MUSDIS_IDENTITY__HASH_ITERATIONS", str(TEST_HASH_ITERATIONS))


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def sign_up(catalog: Catalog, user_name: str = "alice", **kwargs: Any) -> User:
    """Register a user via UserService, asserting success."""
    from musdis.services.users import UserService

    data = {"email": f"{user_name}@example.com", "password": "s3cretpass"} | kwargs
    result = UserService(catalog).sign_up(SignUpRequest(user_name=user_name, **data))
    assert result.is_success, result
    return result.value


def create_artist(catalog: Catalog, name: str, owner: User, **kwargs: Any) -> Artist:
    """Create an artist via ArtistService, asserting success."""
    from musdis.services.artists import ArtistService

    data = {"artist_type_slug": "band", "cover_url": "https://img.example.com/a.jpg"} | kwargs
    result = ArtistService(catalog).create(CreateArtistRequest(name=name, **data), owner.id)
    assert result.is_success, result
    return result.value


def release_request(name: str, artist_ids: list[str], **kwargs: Any) -> CreateReleaseRequest:
    """A valid two-track album request; override any field via kwargs."""
    data: dict[str, Any] = {
        "name": name,
        "release_type_slug": "album",
        "release_date": "1969-09-26",
        "cover_url": "https://img.example.com/cover.jpg",
        "artist_ids": artist_ids,
        "tracks": [
            TrackInfo(title="Come Together", tag_slugs=["rock"]),
            TrackInfo(title="Something"),
        ],
    } | kwargs
    return CreateReleaseRequest(**data)


def create_release(catalog: Catalog, name: str, artist_ids: list[str], **kwargs: Any) -> Release:
    """Create a release via ReleaseService, asserting success."""
    from musdis.services.releases import ReleaseService

    result = ReleaseService(catalog).create(release_request(name, artist_ids, **kwargs))
    assert result.is_success, result
    return result.value
