"""Slug rules: human-readable unique identifiers derived from names.

INVARIANT: A stored slug never changes unless its entity is renamed.
"""

from __future__ import annotations

import re
import unicodedata


def slugify(name: str) -> str:
    """Derive a slug from *name*.

    Applies NFKD normalization, drops non-ASCII marks, lowercases,
    turns every run of non-alphanumerics into a single hyphen, and
    trims hyphens from both ends.

    Examples:
        >>> slugify("The Dark Side of the Moon")
        'the-dark-side-of-the-moon'
        >>> slugify("  Motörhead!! ")
        'motorhead'
        >>> slugify("???")
        ''
    """
    text = unicodedata.normalize("NFKD", name)
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def with_suffix(slug: str, attempt: int) -> str:
    """Return the candidate slug for *attempt* (1 is the bare slug)."""
    if attempt <= 1:
        return slug
    return f"{slug}-{attempt}"
