"""Doctor and setup commands for environment diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fleet_probe.core.config import AppSettings, get_user_env_file, load_settings, write_user_env_vars
from fleet_probe.core.errors import ConfigurationError, RosterError
from fleet_probe.core.roster_loader import load_roster, resolve_roster_path

_console = Console()


def _check_roster(explicit: Path | None, settings: AppSettings) -> tuple[bool, str]:
    try:
        path = resolve_roster_path(explicit, settings)
        servers = load_roster(path)
    except RosterError as exc:
        return False, str(exc)
    return True, f"{len(servers)} servers in {path}"


def doctor(
    roster: Optional[Path] = typer.Option(None, "--roster", "-r", help="Roster JSON to validate."),
) -> None:
    """Run configuration checks and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _console.print(f"[red]Configuration: FAIL[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="fleet-probe doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.has_credentials:
        table.add_row("Credentials", "OK", f"user {settings.username}")
    else:
        table.add_row("Credentials", "FAIL", "Set HUB_USERNAME/HUB_PASSWORD or run `fleet-probe setup`")

    ok_roster, detail_roster = _check_roster(roster, settings)
    table.add_row("Roster", "OK" if ok_roster else "FAIL", detail_roster)

    table.add_row("Auth timeout", "OK", f"{settings.auth_timeout_seconds:g}s")
    table.add_row("Probe timeout", "OK", f"{settings.probe_timeout_seconds:g}s")
    if settings.verify_tls:
        table.add_row("TLS verification", "OK", "certificates are verified")
    else:
        table.add_row("TLS verification", "WARN", "disabled (self-signed fleet); set HUB_VERIFY_TLS=true to enable")

    _console.print(table)

    if not (settings.has_credentials and ok_roster):
        raise typer.Exit(code=1)


def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    username = typer.prompt("Hub username").strip()
    password = typer.prompt("Hub password", hide_input=True, confirmation_prompt=False).strip()
    roster = typer.prompt("Roster path (optional)", default="", show_default=False).strip()

    if not username or not password:
        raise typer.BadParameter("username and password are required")

    values = {"HUB_USERNAME": username, "HUB_PASSWORD": password}
    if roster:
        values["HUB_ROSTER_PATH"] = str(Path(roster).expanduser().resolve())

    env_path = write_user_env_vars(values, get_user_env_file())
    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
