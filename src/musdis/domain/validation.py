"""Field rules shared by request models.

Rules never stop at the first violation: a :class:`Violations` collector
gathers every message in field order so the caller can report all of
them in one response.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from urllib.parse import urlparse

MAX_NAME_LENGTH = 255

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_USER_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,32}$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ValidationResult:
    """Result of a request validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


class Violations:
    """Ordered collector of validation messages."""

    def __init__(self) -> None:
        self._errors: list[str] = []

    def require(self, condition: bool, message: str) -> None:
        if not condition:
            self._errors.append(message)

    def extend(self, messages: list[str]) -> None:
        self._errors.extend(messages)

    def result(self) -> ValidationResult:
        return ValidationResult(valid=not self._errors, errors=list(self._errors))


def check_name(value: str, label: str) -> list[str]:
    """Non-blank and at most :data:`MAX_NAME_LENGTH` characters."""
    if not value.strip():
        return [f"{label} is required."]
    if len(value) > MAX_NAME_LENGTH:
        return [f"{label} must be at most {MAX_NAME_LENGTH} characters."]
    return []


def check_slug_reference(value: str, label: str) -> list[str]:
    if not value.strip():
        return [f"{label} is required."]
    return []


def parse_iso_date(value: str) -> date | None:
    """Parse ``YYYY-MM-DD``; None if malformed.

    Only the extended calendar form is accepted, so ``20240115`` and week
    dates such as ``2024-W03-1`` are rejected.
    """
    if _DATE_PATTERN.match(value) is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def check_date(value: str, label: str) -> list[str]:
    if parse_iso_date(value) is None:
        return [f"{label} must be a date in YYYY-MM-DD format."]
    return []


def check_url(value: str, label: str) -> list[str]:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return [f"{label} must be an absolute http(s) URL."]
    return []


def check_ids(values: list[str], label: str) -> list[str]:
    """At least one id, none blank, no duplicates."""
    if not values:
        return [f"{label} must contain at least one id."]
    errors: list[str] = []
    if any(not v.strip() for v in values):
        errors.append(f"{label} must not contain blank ids.")
    if len(set(values)) != len(values):
        errors.append(f"{label} must not contain duplicates.")
    return errors


def check_user_name(value: str) -> list[str]:
    if _USER_NAME_PATTERN.match(value) is None:
        return ["UserName must be 3-32 characters of letters, digits, '_', '.' or '-'."]
    return []


def check_email(value: str) -> list[str]:
    if _EMAIL_PATTERN.match(value) is None:
        return ["Email is not a valid email address."]
    return []


def check_password(value: str, min_length: int) -> list[str]:
    errors: list[str] = []
    if len(value) < min_length:
        errors.append(f"Password must be at least {min_length} characters.")
    if not any(c.isalpha() for c in value):
        errors.append("Password must contain a letter.")
    if not any(c.isdigit() for c in value):
        errors.append("Password must contain a digit.")
    return errors
