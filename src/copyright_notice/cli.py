# Copyright (C) 2025 Francesca Falcone and Mattia Tagliente
# All Rights Reserved

# copyright_notice/cli.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__


def _force_utf8_stdio():
    """Forces stdout and stderr to use UTF-8 encoding."""
    for stream_name in ("stdout", "stderr"):
        stream = getattr(sys, stream_name, None)
        if stream and hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8")
            except TypeError:
                # Some IDE terminals reject the encoding argument; they are UTF-8 already.
                pass


app = typer.Typer(add_completion=False, help="Copyright Notice CLI")

console = Console()

# ---------------------------
# Internal helpers
# ---------------------------


def _fail(msg: str, code: int = 2) -> None:
    console.print(Panel.fit(f"[red]ERROR[/red] {msg}"))
    raise typer.Exit(code)


def _emit(line: str) -> None:
    """Print a plain report line (no markup, no wrapping) for hook/CI parsers."""
    console.print(line, markup=False, highlight=False, soft_wrap=True)


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger("copyright_notice")
    if not root.handlers:
        handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_runtime(
    config_file: Path | None,
    company: str | None = None,
    notice_format: str | None = None,
    auto_fix: bool = False,
):
    from copyright_notice.config.loader import load_config
    from copyright_notice.errors import ConfigLoadFailure

    try:
        cfg = load_config(config_file)
    except ConfigLoadFailure as e:
        _fail(f"Error loading config: {e}")
    return cfg.with_overrides(company=company, notice_format=notice_format, auto_fix=auto_fix)


def _require_files(files: list[Path] | None) -> list[Path]:
    from copyright_notice.engine import expand_paths

    if not files:
        console.print("No files specified")
        raise typer.Exit(1)
    return expand_paths(files)


def _print_errors(report) -> None:
    for err in report.errors:
        _emit(f"ERROR: {err.path}: {err.message}")


def _print_check_report(report) -> None:
    for entry in report.files:
        _emit(entry.line())
    _print_errors(report)
    _emit(report.summary())
    if report.errors:
        _emit(f"{len(report.errors)} file(s) could not be processed")


# ---------------------------
# Root options
# ---------------------------


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None, "--version", "-V", help="Show version and exit", is_eager=True
    )
):
    _force_utf8_stdio()
    if version:
        console.print(f"copyright-notice {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(1)


# ---------------------------
# check
# ---------------------------


@app.command("check")
def check_cmd(
    files: list[Path] | None = typer.Argument(None, help="Files or directories to check"),
    config_file: Path | None = typer.Option(None, "--config", help="Path to config file"),
    company: str | None = typer.Option(None, "--company", help="Company name"),
    year: int | None = typer.Option(None, "--year", help="Override the current year"),
    max_parallel: int = typer.Option(1, "--max-parallel", help="Files processed concurrently"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Check files for copyright notices. Exits 1 if any notice is missing or outdated.
    """
    _configure_logging(verbose)
    paths = _require_files(files)
    cfg = _load_runtime(config_file, company=company)

    from copyright_notice.engine import check_files

    report = check_files(paths, cfg, year=year, max_parallel=max_parallel)
    _print_check_report(report)

    if not report.ok:
        if report.missing or report.outdated:
            _emit("Run with 'fix --auto-fix' to automatically fix issues")
        raise typer.Exit(1)


# ---------------------------
# fix
# ---------------------------


@app.command("fix")
def fix_cmd(
    files: list[Path] | None = typer.Argument(None, help="Files or directories to fix"),
    config_file: Path | None = typer.Option(None, "--config", help="Path to config file"),
    company: str | None = typer.Option(None, "--company", help="Company name"),
    notice_format: str | None = typer.Option(
        None, "--format", help="Notice template ($year, $company_name)"
    ),
    auto_fix: bool = typer.Option(False, "--auto-fix", help="Automatically fix issues"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be changed without making changes"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Append a JSON-lines record for every repaired file"
    ),
    year: int | None = typer.Option(None, "--year", help="Override the current year"),
    max_parallel: int = typer.Option(1, "--max-parallel", help="Files processed concurrently"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Add missing copyright notices and update outdated years.

    Without --auto-fix (or auto_fix: true in the config file) this only reports,
    like `check`.
    """
    _configure_logging(verbose)
    paths = _require_files(files)
    cfg = _load_runtime(config_file, company=company, notice_format=notice_format, auto_fix=auto_fix)

    from copyright_notice.engine import FileStatus, check_files, fix_files
    from copyright_notice.generator import current_year

    if not cfg.auto_fix and not dry_run:
        report = check_files(paths, cfg, year=year, max_parallel=max_parallel)
        _print_check_report(report)
        if not report.ok:
            if report.missing or report.outdated:
                _emit("Run with 'fix --auto-fix' to automatically fix issues")
            raise typer.Exit(1)
        return

    report = fix_files(
        paths, cfg, year=year, dry_run=dry_run, max_parallel=max_parallel, log_path=log_file
    )

    target_year = year if year is not None else current_year()
    verb = "WOULD FIX" if dry_run else "FIXED"
    for entry in report.files:
        if entry.changed:
            if entry.status is FileStatus.OUTDATED:
                _emit(f"{verb}: {entry.path} (year: {entry.year} -> {target_year})")
            else:
                _emit(f"{verb}: {entry.path} (notice inserted)")
        elif entry.status is not FileStatus.OK:
            _emit(entry.line())
    _print_errors(report)

    summary_table = Table(title="Copyright Fix Summary")
    summary_table.add_column("Metric", justify="left", style="cyan")
    summary_table.add_column("Count", justify="right", style="magenta")
    summary_table.add_row("Scanned", str(report.scanned))
    summary_table.add_row("[yellow]Missing[/yellow]", str(report.missing))
    summary_table.add_row("[yellow]Outdated[/yellow]", str(report.outdated))
    summary_table.add_row("[green]Fixed[/green]", str(report.fixed))
    summary_table.add_row("[red]Errors[/red]", str(len(report.errors)))
    console.print(summary_table)

    if dry_run:
        console.print("[yellow]Dry-run: no files were written.[/yellow]")
    if not report.ok:
        raise typer.Exit(1)


# ---------------------------
# version
# ---------------------------


@app.command("version")
def version_cmd():
    """Show version information."""
    console.print(f"copyright-notice {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
