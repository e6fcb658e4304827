"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y verificación TLS para login y manifest.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

from urllib.parse import urljoin

import httpx

from fleet_probe.core.config import AppSettings

SESSION_COOKIE = "JSESSIONID"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    timeout_seconds: float | None = None,
    follow_redirects: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` para hablar con un servidor de la flota.

    Notas:
    - `verify` sale de `settings.verify_tls` (por defecto desactivado: la flota
      usa certificados autofirmados). Es una concesión de seguridad explícita.
    - Un cliente por petición: no hay cookie jar compartido entre servidores.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds or settings.auth_timeout_seconds),
        follow_redirects=follow_redirects,
        headers=headers,
        verify=settings.verify_tls,
        transport=transport,
    )


def resolve_url(origin: str, path: str) -> str:
    """`https://hub:8443/app` + `/debug?manifest` -> `https://hub:8443/debug?manifest`."""

    return urljoin(origin, path)
