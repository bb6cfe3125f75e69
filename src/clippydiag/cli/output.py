"""Terminal rendering of diagnostics."""

from __future__ import annotations

import json
from collections.abc import Sequence

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from clippydiag.lint.models import NormalizedDiagnostic, Severity

# Status messages go to stderr so stdout stays pipeable
_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
}

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
    Severity.HINT: "dim",
}


def status(message: str, *, style: str = "info") -> None:
    """Print a styled status message to stderr."""
    _console.print(f"{_STYLES.get(style, '')}{message}", highlight=False)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    if plural is None:
        plural = singular + "s"
    return f"{count} {singular if count == 1 else plural}"


def echo_json(diagnostics: Sequence[NormalizedDiagnostic]) -> None:
    click.echo(json.dumps([d.to_dict() for d in diagnostics], indent=2))


def render_table(
    diagnostics: Sequence[NormalizedDiagnostic], *, console: Console | None = None
) -> None:
    """Print diagnostics as a table; positions shown 1-based like rustc."""
    console = console or Console()
    table = Table(show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Rule")
    table.add_column("Message")

    for d in diagnostics:
        style = _SEVERITY_STYLES[d.severity]
        table.add_row(
            str(d.line_start + 1),
            str(d.col_start + 1),
            f"[{style}]{d.severity.value}[/{style}]",
            Text(d.source or ""),
            Text(d.message),
        )
    console.print(table)
