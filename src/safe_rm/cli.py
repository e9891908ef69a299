"""safe-rm CLI - Main entry points.

``safe-rm`` is the shim itself: it takes rm's argument vector unchanged and
recognizes no options of its own, so it reads ``sys.argv`` directly instead of
going through typer. ``safe-rm-config`` is a typer app for inspecting the
protected set without deleting anything.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import NoReturn, Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from safe_rm import __version__
from safe_rm.config import ConfigSources, InvalidPatternError, Settings, load_registry
from safe_rm.core.delegate import DelegationError, DelegationGuard
from safe_rm.core.filter import ArgumentFilter, Classification
from safe_rm.safety.protected import ProtectedPathRegistry
from safe_rm.ui.console import create_console, print_error, print_notice

console = create_console(stderr=False)
err_console = create_console()

config_app = typer.Typer(
    name="safe-rm-config",
    help="Inspect the paths safe-rm refuses to delete.",
    no_args_is_help=True,
)


def _configure_logging(debug: bool) -> None:
    """Send DEBUG records to stderr when debugging is enabled."""
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="safe-rm: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> NoReturn:
    """Filter rm's arguments and hand off to the real rm.

    Never returns: the process is either replaced by the delegate or exits
    with a fatal status.
    """
    if argv is None:
        argv = sys.argv
    if environ is None:
        environ = os.environ

    settings = Settings.from_environ(environ)
    _configure_logging(settings.debug)

    try:
        registry = load_registry(ConfigSources.from_environ(environ), console=err_console)
    except InvalidPatternError as e:
        print_error(err_console, str(e))
        sys.exit(e.exit_code)

    result = ArgumentFilter(registry).filter(argv[1:])
    for skipped in result.skipped:
        print_notice(err_console, f"safe-rm: skipping {skipped}")

    guard = DelegationGuard(
        target=settings.target,
        self_path=argv[0] if argv else None,
        echo=settings.dry_run,
    )
    try:
        guard.delegate(result.allowed)
    except DelegationError as e:
        print_error(err_console, str(e))
        sys.exit(e.exit_code)


def _load_registry_or_exit() -> ProtectedPathRegistry:
    """Load the protected set, exit with the shim's status on a bad pattern."""
    sources = ConfigSources.from_environ()
    try:
        registry = load_registry(sources, console=err_console)
    except InvalidPatternError as e:
        print_error(err_console, f"{e} ({e.source})")
        raise typer.Exit(e.exit_code) from e
    return registry


def _source_status(path: str) -> str:
    """Describe whether a config source can be read."""
    if not os.path.exists(path):
        return "[dim]not found[/dim]"
    if os.path.isdir(path) or not os.access(path, os.R_OK):
        return "[red]unreadable[/red]"
    return "[green]exists[/green]"


@config_app.command("sources")
def config_sources() -> None:
    """Show configuration file locations and status, in priority order."""
    sources = ConfigSources.from_environ()

    console.print("[bold]Config file locations:[/bold]\n")
    for label, path in sources.labels():
        console.print(f"  {label + ':':<12} {escape(path)}")
        console.print(f"  {'':<12} {_source_status(path)}\n")


@config_app.command("show")
def config_show() -> None:
    """Display the active protected set and where it came from."""
    registry = _load_registry_or_exit()

    source_text = "built-in defaults" if registry.uses_defaults else "configuration files"
    console.print(
        Panel.fit(
            f"[bold]Protected paths:[/bold] {len(registry)} from {source_text}",
            title="Protected Set",
        )
    )

    table = Table(show_header=True)
    table.add_column("Path", style="cyan")
    for path in registry:
        table.add_row(escape(path))
    console.print(table)


@config_app.command("check")
def config_check(
    paths: list[str] = typer.Argument(..., help="Paths to classify"),
) -> None:
    """Classify paths the way safe-rm would, without deleting anything."""
    registry = _load_registry_or_exit()
    argument_filter = ArgumentFilter(registry)

    table = Table(show_header=True)
    table.add_column("Argument")
    table.add_column("Normalized", style="dim")
    table.add_column("Result")

    blocked = 0
    for path in paths:
        classification, normalized = argument_filter.classify(path)
        if classification is Classification.BLOCKED:
            blocked += 1
            verdict = "[red]blocked[/red]"
        else:
            verdict = "[green]allowed[/green]"
        table.add_row(escape(path), escape(normalized), verdict)

    console.print(table)

    if blocked:
        raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"safe-rm v{__version__}")
        raise typer.Exit(0)


@config_app.callback()
def config_main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """safe-rm - Inspect protected paths."""


if __name__ == "__main__":
    main()
