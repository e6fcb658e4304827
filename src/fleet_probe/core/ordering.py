"""Orden total de la flota para el reporte.

Reglas (ascendente, la versión más baja primero):
1. Servidores con versión parseable, por precedencia semver de la parte
   release (lo anterior al primer `-`).
2. Servidores con versión no parseable, en orden de entrada.
3. Servidores sin versión (caídos o sin dato), en orden de entrada.

El orden sale de una clave, así que `sorted` es estable y la comparación es
un strict weak ordering.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

from packaging.version import InvalidVersion, Version

from fleet_probe.core.domain.models import ServerDescriptor, VersionMap
from fleet_probe.core.manifest import release_portion

S = TypeVar("S", bound=ServerDescriptor)

_RANK_PARSED = 0
_RANK_UNPARSEABLE = 1
_RANK_MISSING = 2
_ZERO = Version("0")


def version_sort_key(version: str | None) -> tuple[int, Version]:
    if not version:
        return (_RANK_MISSING, _ZERO)
    try:
        return (_RANK_PARSED, Version(release_portion(version).strip()))
    except InvalidVersion:
        return (_RANK_UNPARSEABLE, _ZERO)


def compare_versions(a: str | None, b: str | None) -> int:
    """Comparador clásico: -1 si `a` va antes, 1 si va después, 0 si empatan."""

    key_a = version_sort_key(a)
    key_b = version_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def order_servers(servers: Iterable[S], versions: VersionMap) -> list[S]:
    """Ordena el roster completo (incluidos los caídos) según `versions`."""

    return sorted(servers, key=lambda server: version_sort_key(versions.get(server.origin)))

