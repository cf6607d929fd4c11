"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Catalog initialization, JSON payload
reading, and the single place where a Result becomes process output
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from musdis.output.formatters import format_result
from musdis.results import ValidationError, ValueResult

if TYPE_CHECKING:
    from musdis.config.settings import MusdisSettings
    from musdis.infrastructure.catalog import Catalog
    from musdis.results import Result


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The catalog is lazily initialized on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: MusdisSettings) -> None:
        self.settings = settings
        self._catalog: Catalog | None = None

        from musdis.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            log_sql=settings.database.log_sql,
        )

    @property
    def catalog(self) -> Catalog:
        """The catalog instance (created lazily on first access)."""
        if self._catalog is None:
            from musdis.infrastructure.catalog import Catalog

            self._catalog = Catalog(self.settings)
        return self._catalog

    def close(self) -> None:
        """Dispose the catalog engine, if one was opened."""
        if self._catalog is not None:
            self._catalog.close()
            self._catalog = None

    def read_payload(self, raw: str) -> ValueResult[Any]:
        """Decode a JSON payload argument (``-`` reads stdin, ``@FILE`` reads a file)."""
        if raw == "-":
            raw = click.get_text_stream("stdin").read()
        elif raw.startswith("@"):
            try:
                raw = Path(raw[1:]).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                return ValidationError(
                    "Request body file cannot be read.", [str(exc)]
                ).to_value_result()
        try:
            return ValueResult.success(json.loads(raw))
        except json.JSONDecodeError as exc:
            return ValidationError("Request body is not valid JSON.", [str(exc)]).to_value_result()

    def emit(self, result: Result, *, op: str) -> None:
        """Format and output a Result with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes problem details to stderr, exits with code 1.
        """
        output = format_result(result, op=op, json_output=self.settings.json_output)
        if result.is_success:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
