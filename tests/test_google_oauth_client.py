from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from jobjotter.clients.google_auth import GoogleOAuthClient
from jobjotter.core.config import GoogleSettings, OAuthSettings
from jobjotter.core.errors import CodeExchangeError, TokenRefreshError
from jobjotter.models.oauth import now_ms


def _client(handler) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        GoogleSettings(
            GOOGLE_CLIENT_ID="client",
            GOOGLE_CLIENT_SECRET="secret",
            GOOGLE_REDIRECT_URI="https://example.com/callback",
        ),
        OAuthSettings(),
        transport=httpx.MockTransport(handler),
    )


def test_authorization_url_requests_offline_consent() -> None:
    url = _client(lambda request: httpx.Response(200)).build_authorization_url("st")

    parts = urlsplit(url)
    params = parse_qs(parts.query)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == GoogleOAuthClient.AUTH_BASE_URL
    assert params["state"] == ["st"]
    assert params["access_type"] == ["offline"]
    assert params["prompt"] == ["consent"]
    assert params["client_id"] == ["client"]
    assert "https://www.googleapis.com/auth/calendar" in params["scope"][0].split(" ")


@pytest.mark.anyio
async def test_refresh_computes_expiry_from_expires_in() -> None:
    seen: list[dict[str, list[str]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(parse_qs(request.content.decode("utf-8")))
        return httpx.Response(200, json={"access_token": "new", "expires_in": 3600})

    before = now_ms()
    grant = await _client(handler).refresh_token("R")
    after = now_ms()

    assert seen[0]["grant_type"] == ["refresh_token"]
    assert seen[0]["refresh_token"] == ["R"]
    assert grant.access_token == "new"
    assert grant.refresh_token is None
    assert before + 3_600_000 <= grant.expiry <= after + 3_600_000


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(400, json={"error": "invalid_grant"}),
        httpx.Response(200, json={"token_type": "Bearer"}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_refresh_failures_raise_token_refresh_error(response: httpx.Response) -> None:
    with pytest.raises(TokenRefreshError):
        await _client(lambda request: response).refresh_token("R")


@pytest.mark.anyio
async def test_refresh_transport_error_raises_token_refresh_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TokenRefreshError):
        await _client(handler).refresh_token("R")


@pytest.mark.anyio
async def test_exchange_returns_grant_with_refresh_token() -> None:
    seen: list[dict[str, list[str]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(parse_qs(request.content.decode("utf-8")))
        return httpx.Response(
            200,
            json={"access_token": "A", "refresh_token": "R", "expires_in": 3599},
        )

    grant = await _client(handler).exchange_authorization_code("auth-code")

    assert seen[0]["code"] == ["auth-code"]
    assert seen[0]["grant_type"] == ["authorization_code"]
    assert seen[0]["redirect_uri"] == ["https://example.com/callback"]
    assert (grant.access_token, grant.refresh_token) == ("A", "R")


@pytest.mark.anyio
async def test_exchange_rejection_raises_code_exchange_error() -> None:
    with pytest.raises(CodeExchangeError):
        await _client(
            lambda request: httpx.Response(400, json={"error": "invalid_grant"})
        ).exchange_authorization_code("bad-code")
