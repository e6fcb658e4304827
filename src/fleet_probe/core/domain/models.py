"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde (roster JSON) y serialización directa para el
  export JSON, sin acoplar el Core a HTTP.

Nota:
- Estos modelos describen *qué* sabemos de cada servidor, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

HEADER: tuple[str, str, str, str] = ("Origin", "Type", "Version", "Status")
NOT_AVAILABLE = "N/A"

# origin -> versión; solo contiene servidores que respondieron con versión.
VersionMap = dict[str, str]


class AuthOutcome(str, Enum):
    """Resultado del login contra un servidor."""

    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"
    UNREACHABLE = "unreachable"


class ServerDescriptor(BaseModel):
    """Entrada del roster: un despliegue conocido."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    origin: str = Field(
        ...,
        min_length=1,
        description="Scheme + host + puerto del servidor (clave única).",
    )
    type: str = Field(
        ...,
        description="Etiqueta libre del despliegue (prod, staging, ...).",
    )


class AuthenticatedServer(ServerDescriptor):
    """`ServerDescriptor` más el resultado del login.

    `session_id` puede existir aunque `is_alive` sea falso (login con status
    distinto de 204) y falta siempre que el fallo fue de transporte.
    """

    session_id: str | None = Field(
        default=None,
        description="Valor de la cookie JSESSIONID emitida en el login.",
    )
    is_alive: bool = Field(
        default=False,
        description="True solo si el login respondió 204 No Content.",
    )
    auth_outcome: AuthOutcome = Field(
        default=AuthOutcome.UNREACHABLE,
        description="Por qué el servidor está (o no) vivo.",
    )
    status_code: int | None = Field(
        default=None,
        description="Status HTTP del login, si hubo respuesta.",
    )
    error: str | None = Field(
        default=None,
        description="Detalle del fallo de transporte, si lo hubo.",
    )

    @classmethod
    def unreachable(cls, server: ServerDescriptor, error: str) -> "AuthenticatedServer":
        return cls(
            origin=server.origin,
            type=server.type,
            auth_outcome=AuthOutcome.UNREACHABLE,
            error=error,
        )


class VersionLookup(BaseModel):
    """Resultado de buscar la versión en un manifest.

    - `found=False`: ninguna línea contiene el marcador.
    - `found=True, version=None`: el marcador existe pero sin valor.
    """

    model_config = ConfigDict(frozen=True)

    found: bool
    version: str | None = None

    @classmethod
    def not_found(cls) -> "VersionLookup":
        return cls(found=False)


class ReportRow(BaseModel):
    """Fila del reporte tal como la consume el renderer."""

    model_config = ConfigDict(frozen=True)

    origin: str
    type: str
    version: str = NOT_AVAILABLE
    status: str
    is_alive: bool

    def cells(self) -> list[str]:
        return [self.origin, self.type, self.version, self.status]


class FleetReport(BaseModel):
    """Agregado de una ejecución: servidores ordenados, versiones y filas."""

    servers: list[AuthenticatedServer] = Field(
        default_factory=list,
        description="Roster completo ya autenticado y ordenado para mostrar.",
    )
    versions: VersionMap = Field(
        default_factory=dict,
        description="Versiones por origin (solo servidores con dato).",
    )
    rows: list[ReportRow] = Field(
        default_factory=list,
        description="Filas del reporte, en el mismo orden que `servers`.",
    )
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de generación (UTC).",
    )

    @property
    def alive_count(self) -> int:
        return sum(1 for s in self.servers if s.is_alive)
