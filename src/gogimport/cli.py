# src/gogimport/cli.py

import difflib
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

VERSION = "gogimport v0.0.1"

# CLI argument/option definitions
FILES = typer.Argument(None, help="Go source files; reads stdin when omitted")
LOCAL = typer.Option(None, "--local", "-l", help="Import path prefix of local packages")
WRITE = typer.Option(False, "--write", "-w", help="Write result to the source files")
LIST_ONLY = typer.Option(False, "--list", help="List files whose imports would change")
DIFF = typer.Option(False, "--diff", "-d", help="Show a diff instead of the rewritten source")
GOFMT = typer.Option(False, "--gofmt", help="Run gofmt on the result")
CONFIG_PATH = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file")
DEBUG = typer.Option(False, "--debug", help="Show debug information")

app = typer.Typer(name="gogimport", help="Group and sort Go import declarations")
std_app = typer.Typer(help="Manage the cached Go standard library package list")
app.add_typer(std_app, name="std")
console = Console()
err_console = Console(stderr=True)


def _load_config(config_path: Optional[Path]):
    from .core.config import CONFIG_FILENAME, get_config_dir, get_default_config, load_config
    from .core.errors import ConfigError

    path = config_path or get_config_dir() / CONFIG_FILENAME
    try:
        if config_path or path.exists():
            return load_config(path)
        return get_default_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(2) from e


def _show_diff(path: Path, original: str, output: str):
    diff = "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            output.splitlines(keepends=True),
            fromfile=f"{path}.orig",
            tofile=str(path),
        )
    )
    console.print(Syntax(diff, "diff", theme="ansi_dark"))


@app.command("format")
def format_files(
    files: Optional[List[Path]] = FILES,
    local: Optional[str] = LOCAL,
    write: bool = WRITE,
    list_only: bool = LIST_ONLY,
    diff: bool = DIFF,
    gofmt: bool = GOFMT,
    config_path: Optional[Path] = CONFIG_PATH,
    debug: bool = DEBUG,
):
    """Regroup imports into standard library, local and third-party groups."""
    from .core.engine import build_settings, process_files, sort_source
    from .core.errors import FileError
    from .core.logging import setup_logging

    config = _load_config(config_path)
    setup_logging(log_dir=Path(config.log_dir) if config.log_dir else None, debug=debug)

    local_prefix = local or config.local_prefix
    if not local_prefix:
        err_console.print("[red]Error: --local must be set[/red]")
        raise typer.Exit(2)
    if gofmt:
        config.gofmt = True

    settings = build_settings(config, local_prefix)

    if not files:
        try:
            output = sort_source(sys.stdin.read(), settings)
        except FileError as e:
            err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
            raise typer.Exit(1) from e
        typer.echo(output, nl=False)
        return

    failed = 0
    for result in process_files(files, settings, write=write):
        if not result.success:
            failed += 1
            err_console.print(f"[red]{escape(str(result.error))}[/red]", highlight=False)
            continue
        if list_only:
            if result.changed:
                typer.echo(str(result.path))
        elif diff:
            if result.changed:
                _show_diff(result.path, result.original, result.output)
        elif write:
            if result.written:
                err_console.print(f"[green]Rewrote {result.path}[/green]", highlight=False)
        else:
            typer.echo(result.output, nl=False)

    if failed:
        raise typer.Exit(1)


@app.command()
def version():
    """Print the gogimport version."""
    console.print(VERSION)


@std_app.command("show")
def std_show(config_path: Optional[Path] = CONFIG_PATH):
    """Show the cached standard library package list."""
    from .core.errors import StdPackagesError
    from .core.stdpkgs import StdPackages

    config = _load_config(config_path)
    std = StdPackages(Path(config.cache_dir), config.go_binary)
    try:
        names = std.names()
    except StdPackagesError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Standard Library Cache")
    table.add_column("Go version", style="cyan")
    table.add_column("Packages", style="green")
    table.add_column("Cache file", style="yellow")
    table.add_row(std.go_version(), str(len(names)), str(std.cache_path))
    console.print(table)


@std_app.command("refresh")
def std_refresh(config_path: Optional[Path] = CONFIG_PATH):
    """Rebuild the standard library package list from the Go toolchain."""
    from .core.errors import StdPackagesError
    from .core.stdpkgs import StdPackages

    config = _load_config(config_path)
    std = StdPackages(Path(config.cache_dir), config.go_binary)
    try:
        names = std.refresh()
    except StdPackagesError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Cached {len(names)} packages in {std.cache_path}[/green]")


if __name__ == "__main__":
    app()
