from __future__ import annotations

from typing import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from fleet_probe.core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, username="admin", password="s3cret")


class FakeFleet:
    """Fake fleet behind an `httpx.MockTransport`.

    `logins` maps host -> callable(request) -> Response (or raises);
    `manifests` maps host -> callable(request) -> Response (or raises).
    Every request is recorded in `requests`.
    """

    def __init__(self) -> None:
        self.logins: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.manifests: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def login_ok(self, host: str, session: str = "sess-1") -> None:
        self.logins[host] = lambda r: httpx.Response(
            204, headers=[("set-cookie", f"JSESSIONID={session}; Path=/; HttpOnly")]
        )

    def login_status(self, host: str, status: int, cookie: str | None = None) -> None:
        headers = [("set-cookie", cookie)] if cookie else []
        self.logins[host] = lambda r: httpx.Response(status, headers=headers)

    def manifest(self, host: str, text: str) -> None:
        self.manifests[host] = lambda r: httpx.Response(200, text=text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if request.url.path == "/j_spring_security_check":
            route = self.logins.get(host)
        elif request.url.path == "/debug":
            route = self.manifests.get(host)
        else:
            route = None
        if route is None:
            raise httpx.ConnectError("connection refused", request=request)
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def manifest_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/debug"]

    @staticmethod
    def form_of(request: httpx.Request) -> dict[str, list[str]]:
        return parse_qs(request.content.decode("utf-8"))


@pytest.fixture
def fleet() -> FakeFleet:
    return FakeFleet()
