"""@logged: structured outcome logging for service operations.

Every public service operation is wrapped so that its outcome is logged
once, with the operation name, duration and (on failure) the error's
status and description. Results pass through unchanged.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import structlog

from musdis.results import Result

log = structlog.get_logger("musdis.services")

_P = ParamSpec("_P")
_R = TypeVar("_R")


def logged(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: log the outcome of a Result-returning service method.

    Failures log at INFO (they are expected outcomes, not faults);
    successes at DEBUG. Exceptions are logged and re-raised.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        op = func.__qualname__
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.exception("operation.crashed", op=op)
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        if isinstance(result, Result) and result.is_failure:
            log.info(
                "operation.failed",
                op=op,
                duration_ms=duration_ms,
                status=result.error.status,
                error=result.error.description,
            )
        else:
            log.debug("operation.succeeded", op=op, duration_ms=duration_ms)
        return result

    return wrapper
