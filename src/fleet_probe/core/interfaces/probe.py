"""Contratos de los adaptadores que hablan con cada servidor.

Por qué Protocol:
- El pipeline solo necesita `authenticate` y `get_version`; los tests
  pueden inyectar fakes sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fleet_probe.core.domain.models import AuthenticatedServer, ServerDescriptor, VersionMap


@runtime_checkable
class Authenticator(Protocol):
    """Login contra un servidor. Nunca lanza: el fallo va en el resultado."""

    async def authenticate(self, server: ServerDescriptor) -> AuthenticatedServer:
        ...


@runtime_checkable
class VersionProbe(Protocol):
    """Lee la versión de un servidor vivo. Devuelve `{}` si no hay dato."""

    async def get_version(self, server: AuthenticatedServer) -> VersionMap:
        ...
