"""BaseService: foundation for all musdis services.

Every service receives a :class:`Catalog` at construction time. The
Catalog provides read connections and the :meth:`Catalog.atomic` unit
of work; services own their transaction boundaries through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from musdis.config.settings import MusdisSettings
    from musdis.infrastructure.catalog import Catalog


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class TagService(BaseService):
            def create(self, request: CreateTagRequest) -> ValueResult[Tag]:
                return self._catalog.atomic(lambda conn: ...)
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    @property
    def _settings(self) -> MusdisSettings:
        return self._catalog.settings
