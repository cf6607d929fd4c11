"""Problem-details rendering (RFC 7807 shape).

This is the one place where an :class:`Error` becomes a transport-level
body. Every outward-facing surface renders through
:func:`to_problem_details` so that status, title and type are mapped
exactly once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from musdis.results.errors import Error


class ProblemDetails(BaseModel):
    """Structured error response body."""

    model_config = ConfigDict(frozen=True)

    type: str
    title: str
    status: int
    detail: str
    errors: list[str] = Field(default_factory=list)


def to_problem_details(error: Error) -> ProblemDetails:
    """Render *error* verbatim: no status or title is invented here."""
    return ProblemDetails(
        type=error.type,
        title=error.title,
        status=error.status,
        detail=error.description,
        errors=list(error.details),
    )
