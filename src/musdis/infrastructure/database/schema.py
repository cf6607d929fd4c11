"""SQLAlchemy Core table definitions for the musdis database.

Relations are plain foreign-key columns and link tables. There is no ORM
mapping and therefore no lazy loading: services join or query link
tables explicitly.

``creator_user_id`` and ``artist_users.user_id`` reference the identity
store by value only. The music catalog reaches users through the
identity service, never through a foreign key.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, MetaData, Table, Text, UniqueConstraint

metadata = MetaData()

# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_name", Text, nullable=False, unique=True),
    Column("normalized_user_name", Text, nullable=False, unique=True),
    Column("email", Text, nullable=False),
    Column("normalized_email", Text, nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("created", Text, nullable=False),
)

# ---------------------------------------------------------------------------
# Music catalog
# ---------------------------------------------------------------------------

artist_types = Table(
    "artist_types",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
)

artists = Table(
    "artists",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("cover_url", Text, nullable=False),
    Column("artist_type_id", Text, ForeignKey("artist_types.id"), nullable=False),
    Column("creator_user_id", Text, nullable=False),
)

artist_users = Table(
    "artist_users",
    metadata,
    Column("artist_id", Text, ForeignKey("artists.id"), nullable=False),
    Column("user_id", Text, nullable=False),
    UniqueConstraint("artist_id", "user_id"),
)

release_types = Table(
    "release_types",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
)

releases = Table(
    "releases",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("release_type_id", Text, ForeignKey("release_types.id"), nullable=False),
    Column("release_date", Text, nullable=False),  # YYYY-MM-DD
    Column("cover_url", Text, nullable=False),
)

release_artists = Table(
    "release_artists",
    metadata,
    Column("release_id", Text, ForeignKey("releases.id"), nullable=False),
    Column("artist_id", Text, ForeignKey("artists.id"), nullable=False),
    UniqueConstraint("release_id", "artist_id"),
)

tracks = Table(
    "tracks",
    metadata,
    Column("id", Text, primary_key=True),
    Column("title", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("release_id", Text, ForeignKey("releases.id"), nullable=False),
)

track_artists = Table(
    "track_artists",
    metadata,
    Column("track_id", Text, ForeignKey("tracks.id"), nullable=False),
    Column("artist_id", Text, ForeignKey("artists.id"), nullable=False),
    UniqueConstraint("track_id", "artist_id"),
)

tags = Table(
    "tags",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
)

tag_tracks = Table(
    "tag_tracks",
    metadata,
    Column("tag_id", Text, ForeignKey("tags.id"), nullable=False),
    Column("track_id", Text, ForeignKey("tracks.id"), nullable=False),
    UniqueConstraint("tag_id", "track_id"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_artist_users_user", artist_users.c.user_id)
Index("ix_release_artists_artist", release_artists.c.artist_id)
Index("ix_tracks_release", tracks.c.release_id)
Index("ix_track_artists_artist", track_artists.c.artist_id)
Index("ix_tag_tracks_track", tag_tracks.c.track_id)

# Tables that carry a unique ``slug`` column.
SLUGGED_TABLES: dict[str, Table] = {
    "artist": artists,
    "release": releases,
    "track": tracks,
    "tag": tags,
}
