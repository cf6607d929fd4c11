"""Catalog and identity entities.

Every entity is frozen and every column is required at construction.
Relations are explicit foreign-key ids: nothing is lazy-loaded, a
service fetches related rows with an explicit query when it needs them.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class ArtistType(_Entity):
    """Kind of artist (e.g. musician or band)."""

    id: str
    name: str
    slug: str


class Artist(_Entity):
    """A musician, band or other songwriter.

    Attributes:
        creator_user_id: Identity-service user who created the artist.
            The creator is also the first owner in ``artist_users``.
    """

    id: str
    name: str
    slug: str
    cover_url: str
    artist_type_id: str
    creator_user_id: str


class ReleaseType(_Entity):
    """Kind of release (e.g. album, single, EP)."""

    id: str
    name: str
    slug: str


class Release(_Entity):
    """An album, single or other published collection of tracks."""

    id: str
    name: str
    slug: str
    release_type_id: str
    release_date: date
    cover_url: str
    artist_ids: tuple[str, ...]


class Track(_Entity):
    """A single track of a release."""

    id: str
    title: str
    slug: str
    release_id: str
    artist_ids: tuple[str, ...]
    tag_slugs: tuple[str, ...]


class Tag(_Entity):
    """A genre-like label attached to tracks."""

    id: str
    name: str
    slug: str


class User(_Entity):
    """A registered user. The password hash never leaves the identity store."""

    id: str
    user_name: str
    email: str


class UserInfo(_Entity):
    """User data shared with other services."""

    id: str
    user_name: str
    email: str
