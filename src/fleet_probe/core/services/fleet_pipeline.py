"""Fleet probing orchestration.

Flow: roster -> authenticate every server concurrently -> keep the live ones
-> probe their manifests concurrently -> merge versions by origin -> order the
full roster -> build report rows.

Each server is isolated: an unexpected exception inside one task becomes a
per-server failure and never cancels its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from fleet_probe.adapters.hub_auth import SpringSecurityAuthenticator
from fleet_probe.adapters.manifest_probe import ManifestVersionProbe
from fleet_probe.core.config import AppSettings
from fleet_probe.core.domain.models import (
    AuthenticatedServer,
    FleetReport,
    ServerDescriptor,
    VersionMap,
)
from fleet_probe.core.interfaces.probe import Authenticator, VersionProbe
from fleet_probe.core.ordering import order_servers
from fleet_probe.core.services.report_builder import build_rows

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress).

    A callback that raises is logged and ignored; it never aborts the batch.
    """

    probe_start: Callable[[int], None] | None = None
    authenticated: Callable[[AuthenticatedServer], None] | None = None
    probed: Callable[[AuthenticatedServer, str | None], None] | None = None


def _notify(callback: Callable[..., None] | None, *args: Any) -> None:
    if callback is None:
        return
    try:
        callback(*args)
    except Exception as exc:
        logger.warning("progress hook %r failed: %r", callback, exc)


async def authenticate_all(
    servers: Sequence[ServerDescriptor],
    authenticator: Authenticator,
    hooks: PipelineHooks | None = None,
) -> list[AuthenticatedServer]:
    """One login per server; result order matches `servers`."""

    hooks = hooks or PipelineHooks()

    async def safe_authenticate(server: ServerDescriptor) -> AuthenticatedServer:
        try:
            result = await authenticator.authenticate(server)
        except Exception as exc:
            logger.warning("%s authentication crashed: %r", server.origin, exc)
            result = AuthenticatedServer.unreachable(server, str(exc) or exc.__class__.__name__)
        _notify(hooks.authenticated, result)
        return result

    return list(await asyncio.gather(*(safe_authenticate(s) for s in servers)))


async def probe_versions(
    servers: Sequence[AuthenticatedServer],
    probe: VersionProbe,
    hooks: PipelineHooks | None = None,
) -> VersionMap:
    """Probes only live servers and merges the non-empty results by origin."""

    hooks = hooks or PipelineHooks()
    live = [server for server in servers if server.is_alive]
    _notify(hooks.probe_start, len(live))

    async def safe_probe(server: AuthenticatedServer) -> VersionMap:
        try:
            result = await probe.get_version(server)
        except Exception as exc:
            logger.warning("%s version probe crashed: %r", server.origin, exc)
            result = {}
        _notify(hooks.probed, server, result.get(server.origin))
        return result

    results = await asyncio.gather(*(safe_probe(s) for s in live))

    versions: VersionMap = {}
    for result in results:
        for origin, version in result.items():
            if version:
                versions[origin] = version
    return versions


async def probe_fleet(
    *,
    settings: AppSettings,
    servers: Sequence[ServerDescriptor],
    authenticator: Authenticator | None = None,
    probe: VersionProbe | None = None,
    hooks: PipelineHooks | None = None,
) -> FleetReport:
    """Runs the whole pipeline and returns the ordered report."""

    authenticator = authenticator or SpringSecurityAuthenticator(settings)
    probe = probe or ManifestVersionProbe(settings)

    authenticated = await authenticate_all(servers, authenticator, hooks)
    logger.info(
        "%d/%d servers authenticated",
        sum(1 for s in authenticated if s.is_alive),
        len(authenticated),
    )

    versions = await probe_versions(authenticated, probe, hooks)
    ordered = order_servers(authenticated, versions)

    return FleetReport(
        servers=ordered,
        versions=versions,
        rows=build_rows(ordered, versions),
    )
