import asyncio

import httpx
import pytest

from fleet_probe.adapters.hub_auth import SpringSecurityAuthenticator, parse_session_cookie
from fleet_probe.core.config import AppSettings
from fleet_probe.core.domain.models import AuthOutcome, ServerDescriptor
from fleet_probe.core.errors import ConfigurationError

SERVER = ServerDescriptor(origin="https://hub-a:8443", type="prod")


def _authenticate(settings, fleet, server=SERVER):
    authenticator = SpringSecurityAuthenticator(settings, transport=fleet.transport)
    return asyncio.run(authenticator.authenticate(server))


def test_204_is_alive_with_session(settings, fleet):
    fleet.login_ok("hub-a", session="abc123")

    result = _authenticate(settings, fleet)

    assert result.is_alive
    assert result.session_id == "abc123"
    assert result.auth_outcome is AuthOutcome.AUTHENTICATED
    assert result.status_code == 204
    assert result.origin == SERVER.origin and result.type == SERVER.type


def test_posts_form_credentials_to_spring_security_check(settings, fleet):
    fleet.login_ok("hub-a")

    _authenticate(settings, fleet)

    (request,) = fleet.requests
    assert request.method == "POST"
    assert str(request.url) == "https://hub-a:8443/j_spring_security_check"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert fleet.form_of(request) == {"j_username": ["admin"], "j_password": ["s3cret"]}


@pytest.mark.parametrize("status", [200, 302, 401, 500])
def test_other_status_is_rejected_even_with_cookie(settings, fleet, status):
    fleet.login_status("hub-a", status, cookie="JSESSIONID=zzz; Path=/")

    result = _authenticate(settings, fleet)

    assert not result.is_alive
    assert result.auth_outcome is AuthOutcome.REJECTED
    assert result.status_code == status
    assert result.session_id == "zzz"


def test_204_without_cookie_has_no_session(settings, fleet):
    fleet.login_status("hub-a", 204)

    result = _authenticate(settings, fleet)

    assert result.is_alive
    assert result.session_id is None


def test_connection_error_is_unreachable(settings, fleet):
    result = _authenticate(settings, fleet)

    assert not result.is_alive
    assert result.session_id is None
    assert result.auth_outcome is AuthOutcome.UNREACHABLE
    assert "refused" in (result.error or "")


def test_timeout_is_unreachable(settings, fleet):
    def slow(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    fleet.logins["hub-a"] = slow

    result = _authenticate(settings, fleet)

    assert result.auth_outcome is AuthOutcome.UNREACHABLE
    assert not result.is_alive


def test_only_first_set_cookie_header_is_read():
    assert parse_session_cookie(["other=1; Path=/", "JSESSIONID=late"]) is None
    assert parse_session_cookie(["JSESSIONID=first; Secure; HttpOnly", "JSESSIONID=late"]) == "first"
    assert parse_session_cookie([]) is None


def test_missing_credentials_fail_at_construction():
    with pytest.raises(ConfigurationError):
        SpringSecurityAuthenticator(AppSettings(_env_file=None, username="", password=""))


@pytest.mark.parametrize(
    "header",
    [
        "JSESSIONID=abc123; Path=/; Secure; HttpOnly; Partitioned",
        "JSESSIONID=abc123; Path=/; Domain=x; foo",
        'JSESSIONID="abc123"; SameSite=None; Secure',
        "Path=/; JSESSIONID=abc123",
    ],
)
def test_bare_and_unknown_flags_do_not_hide_session(header):
    assert parse_session_cookie([header]) == "abc123"


def test_empty_session_value_is_none():
    assert parse_session_cookie(["JSESSIONID=; Path=/"]) is None


def test_partitioned_cookie_keeps_session_end_to_end(settings, fleet):
    fleet.logins["hub-a"] = lambda r: httpx.Response(
        204, headers=[("set-cookie", "JSESSIONID=abc123; Path=/; Secure; HttpOnly; Partitioned")]
    )

    result = _authenticate(settings, fleet)

    assert result.is_alive
    assert result.session_id == "abc123"
