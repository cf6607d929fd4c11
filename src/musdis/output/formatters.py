"""Rich/JSON output for service results.

The CLI renders a Result for humans (Rich text) or machines (--json).
Failures are always rendered through :func:`to_problem_details`, so the
status, title and type shown are exactly those fixed by the error.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.markup import escape
from rich.table import Table

from musdis.output.console import create_console, get_output
from musdis.results import ValueResult, to_problem_details

if TYPE_CHECKING:
    from rich.console import Console

    from musdis.results import Result


def dump_value(value: Any) -> Any:
    """JSON-compatible form of a result value (models, lists of models, None)."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [dump_value(item) for item in value]
    return value


def result_payload(result: Result, *, op: str) -> dict[str, Any]:
    """The JSON document for *result*.

    Success: ``{"ok": true, "op": ..., "data": ...}``.
    Failure: ``{"ok": false, "op": ..., "problem": {...problem details...}}``.
    """
    if result.is_failure:
        problem = to_problem_details(result.error)
        return {"ok": False, "op": op, "problem": problem.model_dump(mode="json")}
    data = dump_value(result.value) if isinstance(result, ValueResult) else None
    return {"ok": True, "op": op, "data": data}


def format_result(result: Result, *, op: str, json_output: bool = False) -> str:
    """Format a Result for display.

    Args:
        result: The service result to format.
        op: Operation name shown in the status line (e.g. ``"create_release"``).
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return _json.dumps(result_payload(result, op=op), indent=2)

    console = create_console()
    if result.is_failure:
        _render_problem(console, result, op)
    else:
        _render_success(console, result, op)
    return get_output(console).rstrip("\n")


def _render_problem(console: Console, result: Result, op: str) -> None:
    problem = to_problem_details(result.error)
    console.print(f"[musdis.error]ERROR[/] [musdis.op]{op}[/] {problem.status} {problem.title}")
    console.print(f"  {problem.detail}", markup=False)
    for message in problem.errors:
        console.print(f"  - {message}", markup=False)


def _render_success(console: Console, result: Result, op: str) -> None:
    console.print(f"[musdis.ok]OK[/] [musdis.op]{op}[/]")
    if not isinstance(result, ValueResult):
        return
    data = dump_value(result.value)
    if isinstance(data, list):
        _render_table(console, data)
    elif isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                value = _json.dumps(value, separators=(",", ":"))
            console.print(f"  [musdis.key]{key}:[/] {escape(str(value))}")


def _render_table(console: Console, rows: list[Any]) -> None:
    if not rows:
        console.print("  (none)", style="musdis.key")
        return
    columns = [key for key in rows[0] if key != "id"] if isinstance(rows[0], dict) else ["value"]
    table = Table(show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for row in rows:
        cells = [row.get(c) for c in columns] if isinstance(row, dict) else [row]
        table.add_row(*(_cell(cell) for cell in cells))
    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value))
    return "" if value is None else escape(str(value))
