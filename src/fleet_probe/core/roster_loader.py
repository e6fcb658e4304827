"""Carga del roster estático de servidores.

Formatos aceptados:
- Lista: `[{"origin": "https://hub-1:8443", "type": "prod"}, ...]`
- Objeto: `{"servers": [...]}`

El roster es la única entrada obligatoria junto a las credenciales; si no se
puede leer, la ejecución aborta antes de tocar la red.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field, ValidationError

from fleet_probe.core.config import AppSettings, get_user_config_dir
from fleet_probe.core.domain.models import ServerDescriptor
from fleet_probe.core.errors import RosterError

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_FILENAME = "servers.json"


class RosterFile(BaseModel):
    servers: list[ServerDescriptor] = Field(default_factory=list)


def resolve_roster_path(explicit: Path | None, settings: AppSettings) -> Path:
    """Busca el roster en ubicaciones comunes.

    Orden:
    1) `--roster` (si se pasó)
    2) `HUB_ROSTER_PATH`
    3) ./servers.json (cwd)
    4) <user config dir>/servers.json
    """

    if explicit is not None:
        return explicit
    if settings.roster_path is not None:
        return settings.roster_path

    candidates = [
        Path.cwd() / DEFAULT_ROSTER_FILENAME,
        get_user_config_dir() / DEFAULT_ROSTER_FILENAME,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    raise RosterError(
        "No roster found: pass --roster, set HUB_ROSTER_PATH or create "
        f"./{DEFAULT_ROSTER_FILENAME}."
    )


def load_roster(path: Path) -> list[ServerDescriptor]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RosterError(f"Cannot read roster {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RosterError(f"Roster {path} is not valid JSON: {exc}") from exc

    if isinstance(data, list):
        data = {"servers": data}

    try:
        roster = RosterFile.model_validate(data)
    except ValidationError as exc:
        raise RosterError(f"Roster {path} has invalid entries: {exc}") from exc

    logger.debug("Loaded %d servers from %s", len(roster.servers), path)
    return roster.servers


def filter_roster(servers: Iterable[ServerDescriptor], types: Iterable[str] | None) -> list[ServerDescriptor]:
    """Se queda con los servidores de los tipos pedidos (todos si no hay filtro)."""

    wanted = {t.strip().lower() for t in types or [] if t.strip()}
    if not wanted:
        return list(servers)
    return [server for server in servers if server.type.lower() in wanted]
