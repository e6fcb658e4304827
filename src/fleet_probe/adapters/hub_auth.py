"""Login contra `j_spring_security_check`.

Contrato del endpoint:
- Éxito = HTTP 204 No Content.
- El token de sesión llega en `Set-Cookie: JSESSIONID=...`.

Cualquier otro status cuenta como rechazo, aunque venga con cookie.
"""

from __future__ import annotations

import logging

import httpx

from fleet_probe.adapters.http_client import SESSION_COOKIE, build_async_client, resolve_url
from fleet_probe.core.config import AppSettings
from fleet_probe.core.domain.models import AuthenticatedServer, AuthOutcome, ServerDescriptor
from fleet_probe.core.interfaces.probe import Authenticator

logger = logging.getLogger(__name__)

AUTH_PATH = "/j_spring_security_check"


def parse_session_cookie(set_cookie_headers: list[str]) -> str | None:
    """Lee `JSESSIONID` de la *primera* cabecera `Set-Cookie` (si existe).

    Se leen los pares `nombre=valor` separados por `;`; los flags sueltos
    (`Secure`, `HttpOnly`, `Partitioned`, ...) no tienen `=` y se ignoran.
    """

    if not set_cookie_headers:
        return None
    for part in set_cookie_headers[0].split(";"):
        name, sep, value = part.partition("=")
        if not sep or name.strip() != SESSION_COOKIE:
            continue
        value = value.strip().strip('"')
        return value or None
    return None


class SpringSecurityAuthenticator(Authenticator):
    """Autentica un servidor con las credenciales de `AppSettings`."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._username, self._password = settings.require_credentials()
        self._transport = transport

    async def authenticate(self, server: ServerDescriptor) -> AuthenticatedServer:
        url = resolve_url(server.origin, AUTH_PATH)
        form = {"j_username": self._username, "j_password": self._password}

        try:
            async with build_async_client(
                self._settings,
                timeout_seconds=self._settings.auth_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(url, data=form)
        except httpx.HTTPError as exc:
            logger.warning("%s unreachable: %s", server.origin, exc.__class__.__name__)
            logger.debug("%s auth transport error: %r", server.origin, exc)
            return AuthenticatedServer.unreachable(server, str(exc) or exc.__class__.__name__)

        session_id = parse_session_cookie(response.headers.get_list("set-cookie"))
        is_alive = response.status_code == httpx.codes.NO_CONTENT
        outcome = AuthOutcome.AUTHENTICATED if is_alive else AuthOutcome.REJECTED
        if not is_alive:
            logger.info("%s rejected login with HTTP %s", server.origin, response.status_code)

        return AuthenticatedServer(
            origin=server.origin,
            type=server.type,
            session_id=session_id,
            is_alive=is_alive,
            auth_outcome=outcome,
            status_code=response.status_code,
        )
