"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core entrega `ReportRow` planos; aquí se decide el color.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from fleet_probe.core.domain.models import HEADER, FleetReport, ReportRow
from fleet_probe.core.services.fleet_pipeline import PipelineHooks

STYLE_UP = "bright_green on black"
STYLE_DOWN = "bright_red on black"


def status_text(row: ReportRow) -> Text:
    return Text(row.status, style=STYLE_UP if row.is_alive else STYLE_DOWN)


def build_status_table(rows: Iterable[ReportRow], *, title: str | None = None) -> Table:
    """Tabla Origin/Type/Version/Status con el status coloreado."""

    origin, server_type, version, status = HEADER
    table = Table(title=title, box=None, header_style="bold", pad_edge=False)
    table.add_column(origin, no_wrap=True)
    table.add_column(server_type)
    table.add_column(version)
    table.add_column(status)
    for row in rows:
        table.add_row(row.origin, row.type, row.version, status_text(row))
    return table


def print_report(console: Console, report: FleetReport) -> None:
    console.print(build_status_table(report.rows))
    console.print(
        f"\n[dim]{report.alive_count}/{len(report.servers)} up, "
        f"{len(report.versions)} with version[/dim]"
    )


def build_progress(console: Console) -> Progress:
    """Barra transitoria: desaparece al terminar y no ensucia la tabla."""

    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )


def progress_hooks(progress: Progress, *, total_servers: int) -> PipelineHooks:
    """Conecta los hooks del pipeline a dos tareas: login y manifest."""

    auth_task = progress.add_task("Authenticating", total=total_servers)
    probe_tasks: list = []

    def on_probe_start(live: int) -> None:
        probe_tasks.append(progress.add_task("Reading manifests", total=live))

    def on_authenticated(_server) -> None:
        progress.advance(auth_task)

    def on_probed(_server, _version) -> None:
        if probe_tasks:
            progress.advance(probe_tasks[-1])

    return PipelineHooks(
        probe_start=on_probe_start,
        authenticated=on_authenticated,
        probed=on_probed,
    )
