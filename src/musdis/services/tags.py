"""TagService: genre-like labels attached to tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select

from musdis.domain.models import Tag
from musdis.domain.slugs import slugify
from musdis.infrastructure.database.schema import tags
from musdis.results import ConflictError, NotFoundError, ValidationError, ValueResult
from musdis.services._helpers import new_id, rejected
from musdis.services.base import BaseService
from musdis.services.tracing import logged

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row

    from musdis.domain.requests import CreateTagRequest


def _to_tag(row: Row) -> Tag:
    return Tag(id=row.id, name=row.name, slug=row.slug)


def resolve_tag_ids(conn: Connection, slugs: list[str]) -> ValueResult[list[str]]:
    """Map tag slugs to ids, reporting every unknown slug at once."""
    if not slugs:
        return ValueResult.success([])
    rows = conn.execute(select(tags.c.id, tags.c.slug).where(tags.c.slug.in_(slugs))).all()
    found = {row.slug: row.id for row in rows}
    missing = [slug for slug in slugs if slug not in found]
    if missing:
        return ValidationError(
            "Some tags do not exist.",
            [f"Tag with slug = {slug} is not found." for slug in missing],
        ).to_value_result()
    return ValueResult.success([found[slug] for slug in dict.fromkeys(slugs)])


class TagService(BaseService):
    """Create and look up tags.

    Tag slugs are the tag's identity: a name whose slug is already taken
    is a conflict, not a reason to suffix.
    """

    @logged
    def create(self, request: CreateTagRequest) -> ValueResult[Tag]:
        vr = request.check()
        if not vr.valid:
            return rejected("Cannot create Tag, incorrect data!", vr).to_value_result()

        slug = slugify(request.name)
        if not slug:
            return ValidationError(
                "Cannot create Tag, incorrect data!",
                ["Name must contain at least one letter or digit."],
            ).to_value_result()

        def _create(conn: Connection) -> ValueResult[Tag]:
            existing = conn.execute(select(tags.c.id).where(tags.c.slug == slug)).first()
            if existing is not None:
                return ConflictError(f"Tag with slug = {slug} already exists.").to_value_result()
            tag = Tag(id=new_id(), name=request.name.strip(), slug=slug)
            conn.execute(insert(tags).values(id=tag.id, name=tag.name, slug=tag.slug))
            return ValueResult.success(tag)

        return self._catalog.atomic(_create)

    @logged
    def get(self, slug: str) -> ValueResult[Tag]:
        with self._catalog.read() as conn:
            row = conn.execute(select(tags).where(tags.c.slug == slug)).first()
        if row is None:
            return NotFoundError(f"Tag with slug = {slug} is not found.").to_value_result()
        return ValueResult.success(_to_tag(row))

    @logged
    def list_tags(self) -> ValueResult[list[Tag]]:
        with self._catalog.read() as conn:
            rows = conn.execute(select(tags).order_by(tags.c.slug)).all()
        return ValueResult.success([_to_tag(row) for row in rows])
