"""Error and the HTTP-mappable error variants.

An :class:`Error` is the failure payload of a Result. It is constructed
once at the failure site, frozen, and attached to exactly one result.

Each :class:`HttpError` variant fixes its status code, canonical title,
and problem-type URI at the type level. Callers may only supply the
description (and, for :class:`ValidationError`, the detail messages).
The variant set is closed: :data:`AnyHttpError` is a discriminated union
over the ``kind`` tag, and renderers read ``status``/``title``/``type``
directly instead of dispatching on the concrete class.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from musdis.results.result import Result, ValueResult

_RFC7231 = "https://datatracker.ietf.org/doc/html/rfc7231"


class Error(BaseModel):
    """Base failure descriptor: numeric classification plus a message.

    Attributes:
        code: Integer classification. For HTTP variants this is the status.
        description: Human-readable message for this occurrence.
        details: Ordered detail messages (validation failures, etc.).
    """

    model_config = ConfigDict(frozen=True)

    error_title: ClassVar[str] = "An error occurred."
    problem_type: ClassVar[str] = "about:blank"

    code: int
    description: str
    details: tuple[str, ...] = ()

    @property
    def status(self) -> int:
        return self.code

    @property
    def title(self) -> str:
        return self.error_title

    @property
    def type(self) -> str:
        return self.problem_type

    def to_result(self) -> Result:
        """Wrap this error into a failed :class:`Result`."""
        return Result.failure(self)

    def to_value_result(self) -> ValueResult[Any]:
        """Wrap this error into a failed :class:`ValueResult`.

        The value type is left to the caller's annotation::

            def create(...) -> ValueResult[Release]:
                return NotFoundError("...").to_value_result()
        """
        return ValueResult.failure(self)


class HttpError(Error):
    """An error associated with a fixed HTTP status code."""

    status_code: ClassVar[int] = 500

    kind: str

    def __init__(self, description: str | None = None, **data: Any) -> None:
        cls = self.__class__
        data.setdefault("code", cls.status_code)
        super().__init__(
            description=cls.error_title if description is None else description,
            **data,
        )

    @model_validator(mode="after")
    def _check_classification(self) -> HttpError:
        if self.code != self.status_code:
            msg = f"{self.__class__.__name__} must carry status {self.status_code}, got {self.code}"
            raise ValueError(msg)
        return self


class ValidationError(HttpError):
    """Input failed validation (400). Carries every violation at once.

    Usage::

        ValidationError(
            "Cannot create Release, incorrect data!",
            ["Name is required.", "ReleaseDate must be YYYY-MM-DD."],
        )
    """

    status_code: ClassVar[int] = 400
    error_title: ClassVar[str] = "One or more validation errors occurred."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.5.1"

    kind: Literal["validation"] = "validation"

    def __init__(
        self,
        description: str | None = None,
        errors: Iterable[str] = (),
        **data: Any,
    ) -> None:
        if isinstance(errors, str):
            errors = (errors,)
        data.setdefault("details", tuple(errors))
        super().__init__(description, **data)


class UnauthorizedError(HttpError):
    """The request lacks valid authentication credentials (401)."""

    status_code: ClassVar[int] = 401
    error_title: ClassVar[str] = "Authentication is required to access the requested resource."
    problem_type: ClassVar[str] = "https://datatracker.ietf.org/doc/html/rfc7235#section-3.1"

    kind: Literal["unauthorized"] = "unauthorized"


class ForbiddenError(HttpError):
    """The server understood the request but refuses to authorize it (403)."""

    status_code: ClassVar[int] = 403
    error_title: ClassVar[str] = "Access to the requested resource is forbidden."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.5.3"

    kind: Literal["forbidden"] = "forbidden"


class NotFoundError(HttpError):
    """The requested resource does not exist (404)."""

    status_code: ClassVar[int] = 404
    error_title: ClassVar[str] = "The requested resource was not found."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.5.4"

    kind: Literal["not_found"] = "not_found"


class NoContentError(HttpError):
    """The target of an operation is absent, so there is nothing to act on.

    Used for deletes of missing rows. Rendered as 404: a delete that found
    nothing is a missing resource, not a successful empty response.
    """

    status_code: ClassVar[int] = 404
    error_title: ClassVar[str] = "The target content of the operation was not found."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.5.4"

    kind: Literal["no_content"] = "no_content"


class ConflictError(HttpError):
    """The request conflicts with the current state of the resource (409)."""

    status_code: ClassVar[int] = 409
    error_title: ClassVar[str] = "The request conflicts with the current state of the resource."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.5.8"

    kind: Literal["conflict"] = "conflict"


class GoneError(HttpError):
    """Access to the target resource is no longer available (410)."""

    status_code: ClassVar[int] = 410
    error_title: ClassVar[str] = "Access to the target resource is no longer available!"
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.6.1"

    kind: Literal["gone"] = "gone"


class InternalServerError(HttpError):
    """An unexpected failure, typically a converted driver exception (500)."""

    status_code: ClassVar[int] = 500
    error_title: ClassVar[str] = "An unexpected error occurred on the server."
    problem_type: ClassVar[str] = f"{_RFC7231}#section-6.6.1"

    kind: Literal["internal"] = "internal"


AnyHttpError = Annotated[
    ValidationError
    | UnauthorizedError
    | ForbiddenError
    | NotFoundError
    | NoContentError
    | ConflictError
    | GoneError
    | InternalServerError,
    Field(discriminator="kind"),
]

_http_error_adapter: TypeAdapter[AnyHttpError] = TypeAdapter(AnyHttpError)


def parse_http_error(data: dict[str, Any]) -> HttpError:
    """Rebuild the concrete variant from its serialized form (``model_dump``)."""
    return _http_error_adapter.validate_python(data)
