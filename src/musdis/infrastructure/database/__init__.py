"""SQLite database engine, schema, and seed data via SQLAlchemy Core."""

from musdis.infrastructure.database.engine import create_db_engine, init_database, seed_id
from musdis.infrastructure.database.schema import (
    SLUGGED_TABLES,
    artist_types,
    artist_users,
    artists,
    metadata,
    release_artists,
    release_types,
    releases,
    tag_tracks,
    tags,
    track_artists,
    tracks,
    users,
)

__all__ = [
    "SLUGGED_TABLES",
    "artist_types",
    "artist_users",
    "artists",
    "create_db_engine",
    "init_database",
    "metadata",
    "release_artists",
    "release_types",
    "releases",
    "seed_id",
    "tag_tracks",
    "tags",
    "track_artists",
    "tracks",
    "users",
]
