"""Result/Error propagation: typed failures returned as data, never raised."""

from musdis.results.errors import (
    AnyHttpError,
    ConflictError,
    Error,
    ForbiddenError,
    GoneError,
    HttpError,
    InternalServerError,
    NoContentError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    parse_http_error,
)
from musdis.results.problem import ProblemDetails, to_problem_details
from musdis.results.result import Result, ResultAccessError, ValueResult

__all__ = [
    "AnyHttpError",
    "ConflictError",
    "Error",
    "ForbiddenError",
    "GoneError",
    "HttpError",
    "InternalServerError",
    "NoContentError",
    "NotFoundError",
    "ProblemDetails",
    "Result",
    "ResultAccessError",
    "UnauthorizedError",
    "ValidationError",
    "ValueResult",
    "parse_http_error",
    "to_problem_details",
]
