"""Catalog: repository owning the database engine and units of work.

The Catalog is the single dependency injected into every service.
:meth:`Catalog.atomic` is the transaction boundary for all mutations:

- A successful result commits.
- A failed result rolls back, so no partial write survives a failure.
- A driver exception (``SQLAlchemyError``) is caught here, logged, rolled
  back and converted into an :class:`InternalServerError` result. It is
  the only place where a database exception becomes a failure value.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from musdis.infrastructure.database.engine import init_database
from musdis.results import InternalServerError, Result

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from musdis.config.settings import MusdisSettings

logger = logging.getLogger(__name__)


class Catalog:
    """Repository encapsulating database access for all services.

    Constructed once at CLI startup from :class:`MusdisSettings` and
    stored on the CLI context. Services receive the Catalog via their
    :class:`~musdis.services.base.BaseService` constructor.
    """

    def __init__(self, settings: MusdisSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.data_root,
            filename=settings.database.filename,
        )

    @property
    def root(self) -> Path:
        """The data root directory."""
        return self._settings.data_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> MusdisSettings:
        return self._settings

    @contextmanager
    def read(self) -> Iterator[Connection]:
        """Connection for read-only queries (never committed)."""
        with self._engine.connect() as conn:
            yield conn

    def atomic[R: Result](self, operation: Callable[[Connection], R]) -> R:
        """Run *operation* in one transaction, committing only on success.

        Usage::

            def _create(conn: Connection) -> ValueResult[Tag]:
                ...

            return self._catalog.atomic(_create)
        """
        with self._engine.connect() as conn:
            txn = conn.begin()
            try:
                result = operation(conn)
                if result.is_failure:
                    txn.rollback()
                    logger.debug("Transaction rolled back: %s", result.error.description)
                else:
                    txn.commit()
            except SQLAlchemyError as exc:
                if txn.is_active:
                    txn.rollback()
                logger.exception("Database error, transaction rolled back")
                error = InternalServerError(f"Cannot save changes to database: {exc}")
                return error.to_value_result()  # type: ignore[return-value]
            except BaseException:
                if txn.is_active:
                    txn.rollback()
                raise
            return result

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
