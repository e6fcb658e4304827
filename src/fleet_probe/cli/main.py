"""Entry point de la CLI (`fleet-probe`)."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from fleet_probe import __version__
from fleet_probe.adapters.json_exporter import export_report_json
from fleet_probe.cli import doctor as doctor_cmd
from fleet_probe.cli.ui_components import build_progress, print_report, progress_hooks
from fleet_probe.core.config import load_settings
from fleet_probe.core.errors import FleetProbeError
from fleet_probe.core.roster_loader import filter_roster, load_roster, resolve_roster_path
from fleet_probe.core.services.fleet_pipeline import probe_fleet

app = typer.Typer(no_args_is_help=True, help="Which Hub servers are up, and on what version.")
app.command(name="doctor")(doctor_cmd.doctor)
app.command(name="setup")(doctor_cmd.setup)

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"fleet-probe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Fleet health-and-version probe."""


@app.command()
def status(
    roster: Optional[Path] = typer.Option(None, "--roster", "-r", help="Roster JSON ([{origin, type}, ...])."),
    server_types: Optional[List[str]] = typer.Option(None, "--type", "-t", help="Only probe servers of this type (repeatable)."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also write the report as JSON."),
    auth_timeout: Optional[float] = typer.Option(None, "--auth-timeout", min=0.1, help="Login timeout (seconds)."),
    probe_timeout: Optional[float] = typer.Option(None, "--probe-timeout", min=0.1, help="Manifest timeout (seconds)."),
    verify_tls: bool = typer.Option(False, "--verify-tls", help="Verify TLS certificates."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Authenticate against every server, read versions and print the table."""

    overrides: dict[str, object] = {}
    if auth_timeout is not None:
        overrides["auth_timeout_seconds"] = auth_timeout
    if probe_timeout is not None:
        overrides["probe_timeout_seconds"] = probe_timeout
    if verify_tls:
        overrides["verify_tls"] = True
    try:
        settings = load_settings(**overrides)
        configure_logging("DEBUG" if verbose else settings.log_level)
        settings.require_credentials()
        servers = load_roster(resolve_roster_path(roster, settings))
    except FleetProbeError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    servers = filter_roster(servers, server_types)
    if not servers:
        _err_console.print("[yellow]No servers to probe.[/yellow]")

    try:
        with build_progress(_err_console) as progress:
            hooks = progress_hooks(progress, total_servers=len(servers))
            report = asyncio.run(probe_fleet(settings=settings, servers=servers, hooks=hooks))
    except KeyboardInterrupt:
        _err_console.print("[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130)

    print_report(_console, report)

    if json_path is not None:
        out = export_report_json(report=report, output_path=json_path)
        _console.print(f"[green]JSON written to:[/green] {out}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
