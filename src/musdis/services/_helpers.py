"""Shared service-layer helper functions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from musdis.results import ValidationError, ValueResult

if TYPE_CHECKING:
    from musdis.domain.validation import ValidationResult


def new_id() -> str:
    """Fresh opaque identifier (32 hex chars)."""
    return uuid.uuid4().hex


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for audit columns)."""
    return datetime.now(UTC).isoformat()


def parse_request[M: BaseModel](model_cls: type[M], data: Any) -> ValueResult[M]:
    """Build a request model from raw input, reporting shape errors as data.

    Every pydantic error becomes one ``"<location>: <message>"`` entry of
    a single :class:`ValidationError`.
    """
    try:
        return ValueResult.success(model_cls.model_validate(data))
    except PydanticValidationError as exc:
        messages = [
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        ]
        return ValidationError("Request body is malformed.", messages).to_value_result()


def rejected(description: str, validation: ValidationResult) -> ValidationError:
    """Turn a failed :class:`ValidationResult` into a :class:`ValidationError`."""
    return ValidationError(description, validation.errors)
