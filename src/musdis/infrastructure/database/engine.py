"""Database engine setup for SQLite with foreign keys enforced.

The DB is stored at ``{data_root}/.musdis/{filename}``. Lookup tables
(artist types, release types, tags) are seeded with deterministic ids
so that every fresh catalog starts with the same reference data.

SQLAlchemy Core (not ORM) is used: rows are fetched explicitly and
mapped to frozen domain models by the services.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any

from sqlalchemy import Table, create_engine, event, insert, select
from sqlalchemy.engine import Engine

from musdis.infrastructure.database.schema import artist_types, metadata, release_types, tags

_SEED_NAMESPACE = uuid.UUID("8f7b3c2e-6d1a-4e59-9c0b-2a4d5e6f7a81")

SEED_ARTIST_TYPES: tuple[tuple[str, str], ...] = (
    ("Musician", "musician"),
    ("Band", "band"),
)

SEED_RELEASE_TYPES: tuple[tuple[str, str], ...] = (
    ("Album", "album"),
    ("Single", "single"),
    ("EP", "ep"),
    ("Compilation", "compilation"),
)

SEED_TAGS: tuple[tuple[str, str], ...] = (
    ("Rock", "rock"),
    ("Pop", "pop"),
    ("Jazz", "jazz"),
    ("Hip Hop", "hip-hop"),
    ("Electronic", "electronic"),
    ("Classical", "classical"),
    ("Metal", "metal"),
    ("Folk", "folk"),
)


def seed_id(table_name: str, slug: str) -> str:
    """Deterministic id for a seeded lookup row."""
    return uuid.uuid5(_SEED_NAMESPACE, f"{table_name}:{slug}").hex


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}")

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(data_root: Path, *, filename: str = "musdis.db") -> Engine:
    """Initialize the musdis database at ``{data_root}/.musdis/{filename}``.

    Creates the directory, all tables from :data:`schema.metadata`, and
    seeds the lookup tables. Idempotent: safe to call on an existing
    catalog.

    Returns the engine ready for use.
    """
    musdis_dir = data_root / ".musdis"
    musdis_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(musdis_dir / filename)
    metadata.create_all(engine)

    _seed(engine, artist_types, SEED_ARTIST_TYPES)
    _seed(engine, release_types, SEED_RELEASE_TYPES)
    _seed(engine, tags, SEED_TAGS)
    return engine


def _seed(engine: Engine, table: Table, rows: tuple[tuple[str, str], ...]) -> None:
    """Insert seed rows that don't exist yet (matched by slug)."""
    with engine.begin() as conn:
        for name, slug in rows:
            existing = conn.execute(select(table.c.id).where(table.c.slug == slug)).first()
            if existing is None:
                conn.execute(
                    insert(table).values(id=seed_id(table.name, slug), name=name, slug=slug)
                )
