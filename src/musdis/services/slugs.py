"""SlugGenerator: unique slugs for slugged catalog tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from musdis.domain.slugs import slugify, with_suffix
from musdis.infrastructure.database.schema import SLUGGED_TABLES
from musdis.results import InternalServerError, ValidationError, ValueResult

if TYPE_CHECKING:
    from sqlalchemy import Connection


class SlugGenerator:
    """Derives a slug from a name and suffixes it until it is unique.

    ``"Abbey Road"`` becomes ``abbey-road``, then ``abbey-road-2``,
    ``abbey-road-3`` … while earlier candidates are taken.
    """

    def __init__(self, max_attempts: int = 100) -> None:
        self._max_attempts = max_attempts

    def generate_unique(
        self,
        conn: Connection,
        entity: str,
        name: str,
        *,
        exclude_id: str | None = None,
    ) -> ValueResult[str]:
        """Return a slug for *name* that is free in *entity*'s table.

        Args:
            entity: Key of :data:`SLUGGED_TABLES` (``"release"``, ``"track"`` …).
            exclude_id: Row allowed to keep its own slug (renames).
        """
        table = SLUGGED_TABLES[entity]
        base = slugify(name)
        if not base:
            return ValidationError(
                f"Cannot derive a slug from {name!r}.",
                [f"Name must contain at least one letter or digit to build a {entity} slug."],
            ).to_value_result()

        for attempt in range(1, self._max_attempts + 1):
            candidate = with_suffix(base, attempt)
            query = select(table.c.id).where(table.c.slug == candidate)
            if exclude_id is not None:
                query = query.where(table.c.id != exclude_id)
            if conn.execute(query).first() is None:
                return ValueResult.success(candidate)

        return InternalServerError(
            f"No free {entity} slug for {base!r} after {self._max_attempts} attempts."
        ).to_value_result()
