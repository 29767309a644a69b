"""Rich terminal reporter — edit table, summary and failure panel."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from patchwise.diff.models import DeleteLine, EditOperation
from patchwise.errors import PatchError, PatchMismatch
from patchwise.patch.result import PatchResult

_OP_STYLE = {
    "delete": "bold white on red",
    "insert": "bold black on green",
}


def _op_pill(edit: EditOperation) -> Text:
    op = "delete" if isinstance(edit, DeleteLine) else "insert"
    return Text(f" {op.upper()} ", style=_OP_STYLE[op])


def render(
    result: PatchResult,
    *,
    show_summary: bool = True,
    show_edits: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print a PatchResult to the terminal using Rich."""
    console = console or Console(stderr=True)
    target = result.path or "document"

    if not result.edits:
        console.print()
        console.print(f"[bold green]✅ Nothing to change — {target} already matches.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    if show_edits:
        console.print()
        table = Table(
            title=f"Edits for {target}",
            show_lines=False,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Op", justify="center", width=10)
        table.add_column("Line", justify="right", style="green")
        table.add_column("Text", overflow="fold")

        for edit in result.edits:
            text = "" if isinstance(edit, DeleteLine) else edit.text
            table.add_row(_op_pill(edit), str(edit.line + 1), Text(text))

        console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.applied:
        console.print(f"[bold green]✅ Patch applied to {target}.[/bold green]")
    else:
        console.print(f"[bold yellow]⚠️  Dry run — {target} was not modified.[/bold yellow]")


def render_error(error: PatchError, *, path: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Print a patch failure; the document is guaranteed untouched."""
    console = console or Console(stderr=True)
    console.print()
    console.print(f"[bold red]❌ Patch rejected[/bold red] [dim]({error.code})[/dim]")
    console.print(f"   {error}", markup=False)
    if isinstance(error, PatchMismatch):
        console.print(f"   expected: {error.expected!r}", markup=False)
        console.print(f"   actual:   {error.actual!r}", markup=False)
    if path:
        console.print(f"[dim]{path} was not modified.[/dim]")


def _print_summary(console: Console, result: PatchResult) -> None:
    console.print()
    console.print(f"[dim]Hunks:[/dim]      {result.hunks}")
    console.print(f"[dim]Deleted:[/dim]    {result.deleted}")
    console.print(f"[dim]Inserted:[/dim]   {result.inserted}")
    console.print(f"[dim]Duration:[/dim]   {result.duration_ms:.1f}ms")
