"""Armado de las filas del reporte.

El Core solo entrega strings y el flag `is_alive`; los colores son cosa del
renderer (`cli.ui_components`).
"""

from __future__ import annotations

from typing import Iterable

from fleet_probe.core.domain.models import (
    HEADER,
    NOT_AVAILABLE,
    AuthenticatedServer,
    ReportRow,
    VersionMap,
)

STATUS_UP = "UP"
STATUS_DOWN = "DOWN"


def build_rows(servers: Iterable[AuthenticatedServer], versions: VersionMap) -> list[ReportRow]:
    """Una fila por servidor, en el orden recibido (ya ordenado)."""

    return [
        ReportRow(
            origin=server.origin,
            type=server.type,
            version=versions.get(server.origin) or NOT_AVAILABLE,
            status=STATUS_UP if server.is_alive else STATUS_DOWN,
            is_alive=server.is_alive,
        )
        for server in servers
    ]


def build_grid(rows: Iterable[ReportRow]) -> list[list[str]]:
    """Cabecera + filas como matriz de strings."""

    return [list(HEADER), *(row.cells() for row in rows)]
