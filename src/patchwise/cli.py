"""patchwise CLI — Typer application with apply, check, extract, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from patchwise import __version__

app = typer.Typer(
    name="patchwise",
    help="Apply generated unified diffs to files, line-exact and all-or-nothing.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

logger = logging.getLogger("patchwise")


def configure_logging(level: str) -> None:
    """Route patchwise loggers through a Rich handler on stderr."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(numeric_level)
    logger.propagate = False


def _load_config(config: Optional[str]):
    from patchwise.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_diff(diff: Optional[str]) -> str:
    """Read diff text from *diff* (a path, or '-' for stdin)."""
    try:
        if diff is None or diff == "-":
            return sys.stdin.read()
        with open(diff, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[bold red]Cannot read diff:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _run(
    file: Optional[str],
    diff: Optional[str],
    config: Optional[str],
    format: Optional[str],
    strict_context: Optional[bool],
    reverse: bool,
    dry_run: bool,
    verbose: bool,
    debug: bool,
) -> None:
    from patchwise.diff.extract import extract_diff
    from patchwise.diff.invert import invert
    from patchwise.errors import NoDiffFound, PatchError
    from patchwise.output import json_report, terminal
    from patchwise.patch.applier import apply_patch
    from patchwise.patch.document import FileDocument

    cfg = _load_config(config)

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if strict_context is not None:
        cfg.apply.strict_context = strict_context

    configure_logging("DEBUG" if debug else "INFO" if verbose else cfg.logging.level)
    as_json = cfg.output.format == "json"

    raw = _read_diff(diff)
    if not raw.strip():
        console.print("[dim]Empty diff — nothing to apply.[/dim]")
        raise typer.Exit(code=0)

    try:
        extracted = extract_diff(raw)
    except NoDiffFound as exc:
        if as_json:
            print(json_report.render_error(exc))
        else:
            terminal.render_error(exc, console=console)
        raise typer.Exit(code=1) from exc

    body = invert(extracted.body) if reverse else extracted.body

    # --- Locate the document ---
    target = file or extracted.filename
    if not target:
        console.print("[bold red]Error:[/bold red] no target file given and the diff names none")
        raise typer.Exit(code=2)
    path = Path(target)
    if not path.is_file():
        console.print(f"[bold red]Error:[/bold red] file not found: {path}")
        raise typer.Exit(code=2)

    logger.info("Target: %s", path)
    logger.debug("Options: strict_context=%s trim_whitespace=%s",
                 cfg.apply.strict_context, cfg.apply.trim_whitespace)

    try:
        document = FileDocument(path)
        result = apply_patch(
            document, body, options=cfg.apply, dry_run=dry_run, path=str(path)
        )
    except PatchError as exc:
        if as_json:
            print(json_report.render_error(exc, path=str(path)))
        else:
            terminal.render_error(exc, path=str(path), console=console)
        raise typer.Exit(code=1) from exc

    if as_json:
        print(json_report.render(result))
    else:
        terminal.render(
            result,
            show_summary=cfg.output.show_summary,
            show_edits=cfg.output.show_edits,
            console=console,
        )


# ── apply ─────────────────────────────────────────────────────────────────────


@app.command()
def apply(
    file: Optional[str] = typer.Argument(None, help="File to patch (default: the file the diff names)"),
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Diff or generated response file ('-' = stdin)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .patchwise.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    strict_context: Optional[bool] = typer.Option(
        None, "--strict-context/--lenient-context", help="Validate context lines against the file",
    ),
    reverse: bool = typer.Option(False, "--reverse", "-R", help="Apply the inverse of the diff"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate and show edits without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Apply a unified diff to a file, all edits or none."""
    _run(file, diff, config, format, strict_context, reverse, dry_run, verbose, debug)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    file: Optional[str] = typer.Argument(None, help="File to check (default: the file the diff names)"),
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Diff or generated response file ('-' = stdin)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .patchwise.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    strict_context: Optional[bool] = typer.Option(
        None, "--strict-context/--lenient-context", help="Validate context lines against the file",
    ),
    reverse: bool = typer.Option(False, "--reverse", "-R", help="Check the inverse of the diff"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Check that a diff applies cleanly, without modifying the file."""
    _run(file, diff, config, format, strict_context, reverse, True, verbose, debug)


# ── extract ───────────────────────────────────────────────────────────────────


@app.command()
def extract(
    diff: Optional[str] = typer.Option(None, "--diff", "-d", help="Generated response file ('-' = stdin)"),
) -> None:
    """Print the diff embedded in a generated response."""
    from patchwise.diff.extract import extract_diff
    from patchwise.errors import NoDiffFound

    try:
        extracted = extract_diff(_read_diff(diff))
    except NoDiffFound as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    if extracted.filename:
        console.print(f"[dim]filename: {extracted.filename}[/dim]")
    sys.stdout.write(extracted.body)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .patchwise.toml"),
) -> None:
    """Generate a starter .patchwise.toml in the current directory."""
    from patchwise.config.defaults import DEFAULT_TOML
    from patchwise.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"patchwise {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """patchwise — apply generated unified diffs safely."""
