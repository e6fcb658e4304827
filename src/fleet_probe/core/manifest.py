"""Extracción de la versión desde el manifest de `/debug?manifest`.

El manifest es texto plano, una clave por línea (`Clave: valor`).
"""

from __future__ import annotations

from fleet_probe.core.domain.models import VersionLookup

VERSION_MARKER = "Product-version"
_SEPARATOR = ": "


def extract_version(manifest_text: str) -> VersionLookup:
    """Busca la primera línea con `Product-version` y devuelve su valor.

    Un valor vacío tras `strip()` cuenta como ausente, no como versión "".
    """

    line = next(
        (candidate for candidate in manifest_text.split("\n") if VERSION_MARKER in candidate),
        None,
    )
    if line is None:
        return VersionLookup.not_found()

    _, sep, value = line.partition(_SEPARATOR)
    if not sep:
        return VersionLookup(found=True, version=None)

    value = value.strip()
    return VersionLookup(found=True, version=value or None)


def release_portion(version: str) -> str:
    """`3.2.1-beta` -> `3.2.1`. Solo se usa para comparar, nunca para mostrar."""

    return version.split("-", 1)[0]
