"""Result and ValueResult: the universal service contract.

INVARIANT: All service-layer methods return a Result (no value) or a
ValueResult (value on success). Failures travel as data: the attached
:class:`~musdis.results.errors.Error` is never raised, only returned.

A result is in exactly one of two states:

- success: ``error`` is absent (and ``value`` is present for ValueResult)
- failure: ``error`` is present (and ``value`` is absent)

Reading the absent side raises :class:`ResultAccessError`. That is a
programming error, not a recoverable failure.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from musdis.results.errors import Error


class ResultAccessError(RuntimeError):
    """Raised when a result is read on the wrong side of its success/failure split."""


class Result:
    """Outcome of an operation that returns no value.

    Usage::

        result = service.delete(release_id)
        if result.is_failure:
            return result.error.to_result()
    """

    __slots__ = ("_error",)

    def __init__(self, error: Error | None = None) -> None:
        object.__setattr__(self, "_error", error)

    @classmethod
    def success(cls) -> Result:
        """Create a successful result with no error."""
        return Result()

    @classmethod
    def failure(cls, error: Error) -> Result:
        """Create a failed result carrying *error*.

        Raises:
            ValueError: If *error* is None.
        """
        if error is None:
            raise ValueError("A failed result requires an error")
        return Result(error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Error:
        """The failure payload. Only valid when :attr:`is_failure` is True."""
        if self._error is None:
            raise ResultAccessError("Cannot access the error of a successful result")
        return self._error

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._error == other._error  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._error is None:
            return f"{type(self).__name__}.success()"
        return f"{type(self).__name__}.failure({self._error!r})"


class ValueResult[T](Result):
    """Outcome of an operation that returns a value of type ``T`` on success."""

    __slots__ = ("_value",)

    def __init__(self, value: T | None = None, error: Error | None = None) -> None:
        if error is not None and value is not None:
            raise ValueError("A failed result cannot carry a value")
        Result.__init__(self, error)
        object.__setattr__(self, "_value", value)

    @classmethod
    def success(cls, value: T) -> ValueResult[T]:  # type: ignore[override]
        """Create a successful result carrying *value*."""
        return ValueResult(value)

    @classmethod
    def failure(cls, error: Error) -> ValueResult[T]:
        """Create a failed result carrying *error*.

        Raises:
            ValueError: If *error* is None.
        """
        if error is None:
            raise ValueError("A failed result requires an error")
        return ValueResult(None, error)

    @property
    def value(self) -> T:
        """The success payload. Only valid when :attr:`is_success` is True."""
        if self._error is not None:
            raise ResultAccessError("Cannot access the value of a failed result")
        return self._value  # type: ignore[return-value]

    def bind[U](self, operation: Callable[[T], ValueResult[U]]) -> ValueResult[U]:
        """Chain a result-returning *operation* on the value.

        Short-circuits on failure: *operation* is never called and the
        same error instance is propagated.
        """
        if self._error is not None:
            return ValueResult.failure(self._error)
        return operation(self._value)  # type: ignore[arg-type]

    def to_result(self) -> Result:
        """Drop the value, preserving the same error instance on failure."""
        if self._error is not None:
            return Result.failure(self._error)
        return Result.success()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        other_state = (other._error, other._value)  # type: ignore[attr-defined]
        return (self._error, self._value) == other_state

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._error is None:
            return f"ValueResult.success({self._value!r})"
        return f"ValueResult.failure({self._error!r})"
