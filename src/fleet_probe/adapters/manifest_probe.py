"""Lectura de la versión vía `/debug?manifest`.

Un servidor sin manifest legible (timeout, error HTTP, marcador ausente)
simplemente no aporta entrada al `VersionMap`.
"""

from __future__ import annotations

import logging

import httpx

from fleet_probe.adapters.http_client import SESSION_COOKIE, build_async_client, resolve_url
from fleet_probe.core.config import AppSettings
from fleet_probe.core.domain.models import AuthenticatedServer, VersionMap
from fleet_probe.core.interfaces.probe import VersionProbe
from fleet_probe.core.manifest import VERSION_MARKER, extract_version

logger = logging.getLogger(__name__)

MANIFEST_PATH = "/debug?manifest"


class ManifestVersionProbe(VersionProbe):
    """Obtiene la versión de un servidor ya autenticado."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def fetch_manifest(self, server: AuthenticatedServer) -> str:
        url = resolve_url(server.origin, MANIFEST_PATH)
        headers: dict[str, str] = {}
        if server.session_id:
            headers["Cookie"] = f"{SESSION_COOKIE}={server.session_id}"

        async with build_async_client(
            self._settings,
            timeout_seconds=self._settings.probe_timeout_seconds,
            transport=self._transport,
            extra_headers=headers,
        ) as client:
            resp = await client.get(url)
        resp.raise_for_status()
        return resp.text

    async def get_version(self, server: AuthenticatedServer) -> VersionMap:
        try:
            manifest = await self.fetch_manifest(server)
        except httpx.HTTPError as exc:
            logger.warning("%s manifest unavailable: %s", server.origin, exc.__class__.__name__)
            return {}

        lookup = extract_version(manifest)
        if not lookup.found:
            logger.warning("%s manifest has no %s line", server.origin, VERSION_MARKER)
            return {}
        if lookup.version is None:
            logger.info("%s manifest has an empty %s", server.origin, VERSION_MARKER)
            return {}

        return {server.origin: lookup.version}
