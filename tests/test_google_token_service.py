from __future__ import annotations

import asyncio
import gc

import pytest

from jobjotter.clients.google_auth import OAuthStateEncoder
from jobjotter.core.config import GoogleSettings, OAuthSettings
from jobjotter.core.errors import (
    CodeExchangeError,
    InvalidStateError,
    NoStoredCredentialError,
    TokenRefreshError,
)
from jobjotter.models.oauth import StoredCredential, TokenGrant, from_epoch_ms, now_ms
from jobjotter.services.google_tokens import GoogleTokenService

HOUR_MS = 3_600_000


class InMemoryCredentialRepository:
    def __init__(self) -> None:
        self.records: dict[int, StoredCredential] = {}
        self.saves: list[tuple[int, StoredCredential]] = []

    async def load(self, user_id: int) -> StoredCredential | None:
        return self.records.get(user_id)

    async def save(self, user_id: int, credential: StoredCredential) -> None:
        self.records[user_id] = credential
        self.saves.append((user_id, credential))


class DummyOAuthClient:
    TOKEN_URL = "https://oauth.example/token"

    def __init__(self, *, grant: TokenGrant | None = None, error: Exception | None = None) -> None:
        self.grant = grant
        self.error = error
        self.refresh_calls: list[str] = []
        self.codes: list[str] = []

    async def refresh_token(self, refresh_token: str) -> TokenGrant:
        self.refresh_calls.append(refresh_token)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        assert self.grant is not None
        return self.grant

    async def exchange_authorization_code(self, code: str) -> TokenGrant:
        self.codes.append(code)
        if self.error is not None:
            raise self.error
        assert self.grant is not None
        return self.grant


def _google_settings() -> GoogleSettings:
    return GoogleSettings(
        GOOGLE_CLIENT_ID="client",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="https://example.com/callback",
    )


def _service(
    repository: InMemoryCredentialRepository,
    oauth_client: DummyOAuthClient,
    encoder: OAuthStateEncoder | None = None,
) -> GoogleTokenService:
    return GoogleTokenService(
        repository=repository,
        oauth_client=oauth_client,  # type: ignore[arg-type]
        state_encoder=encoder or OAuthStateEncoder("state-secret", ttl_seconds=900),
        google_settings=_google_settings(),
        oauth_settings=OAuthSettings(),
    )


@pytest.mark.asyncio
async def test_valid_credential_is_used_without_refresh() -> None:
    repository = InMemoryCredentialRepository()
    expiry = now_ms() + HOUR_MS
    repository.records[1] = StoredCredential(
        access_token="current", refresh_token="refresh", expiry=expiry
    )
    oauth_client = DummyOAuthClient()

    credentials = await _service(repository, oauth_client).get_authorized_client(1)

    assert credentials.token == "current"
    assert credentials.refresh_token == "refresh"
    assert credentials.client_id == "client"
    assert credentials.expiry == from_epoch_ms(expiry)
    assert oauth_client.refresh_calls == []
    assert repository.saves == []


@pytest.mark.asyncio
async def test_expired_credential_refreshes_and_keeps_refresh_token() -> None:
    repository = InMemoryCredentialRepository()
    repository.records[1] = StoredCredential(
        access_token="old", refresh_token="R", expiry=now_ms() - 1000
    )
    new_expiry = now_ms() + HOUR_MS
    oauth_client = DummyOAuthClient(grant=TokenGrant(access_token="new", expiry=new_expiry))

    credentials = await _service(repository, oauth_client).get_authorized_client(1)

    assert oauth_client.refresh_calls == ["R"]
    assert credentials.token == "new"
    assert credentials.refresh_token == "R"
    assert repository.records[1] == StoredCredential(
        access_token="new", refresh_token="R", expiry=new_expiry
    )


@pytest.mark.asyncio
async def test_rotated_refresh_token_replaces_old_one() -> None:
    repository = InMemoryCredentialRepository()
    repository.records[1] = StoredCredential(
        access_token="old", refresh_token="R", expiry=now_ms() - 1000
    )
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="new", refresh_token="R2", expiry=now_ms() + HOUR_MS)
    )

    await _service(repository, oauth_client).get_authorized_client(1)

    assert repository.records[1].refresh_token == "R2"


@pytest.mark.asyncio
async def test_expiry_equal_to_now_counts_as_expired() -> None:
    repository = InMemoryCredentialRepository()
    credential = StoredCredential(access_token="old", refresh_token="R", expiry=1_000)

    assert credential.is_valid(at_ms=999)
    assert not credential.is_valid(at_ms=1_000)

    repository.records[1] = credential
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="new", expiry=now_ms() + HOUR_MS)
    )
    await _service(repository, oauth_client).get_authorized_client(1)

    assert oauth_client.refresh_calls == ["R"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stored",
    [None, StoredCredential(refresh_token="R", expiry=0)],
)
async def test_missing_credential_raises(stored: StoredCredential | None) -> None:
    repository = InMemoryCredentialRepository()
    if stored is not None:
        repository.records[1] = stored
    oauth_client = DummyOAuthClient()

    with pytest.raises(NoStoredCredentialError) as excinfo:
        await _service(repository, oauth_client).get_authorized_client(1)

    assert excinfo.value.status_code == 401
    assert oauth_client.refresh_calls == []


@pytest.mark.asyncio
async def test_refresh_failure_leaves_stored_state_untouched() -> None:
    repository = InMemoryCredentialRepository()
    original = StoredCredential(access_token="old", refresh_token="R", expiry=now_ms() - 1000)
    repository.records[1] = original
    oauth_client = DummyOAuthClient(error=TokenRefreshError())

    with pytest.raises(TokenRefreshError):
        await _service(repository, oauth_client).get_authorized_client(1)

    assert repository.records[1] == original
    assert repository.saves == []


@pytest.mark.asyncio
async def test_expired_without_refresh_token_raises() -> None:
    repository = InMemoryCredentialRepository()
    repository.records[1] = StoredCredential(access_token="old", expiry=now_ms() - 1000)
    oauth_client = DummyOAuthClient()

    with pytest.raises(TokenRefreshError):
        await _service(repository, oauth_client).get_authorized_client(1)

    assert oauth_client.refresh_calls == []


@pytest.mark.asyncio
async def test_concurrent_requests_refresh_once() -> None:
    repository = InMemoryCredentialRepository()
    repository.records[1] = StoredCredential(
        access_token="old", refresh_token="R", expiry=now_ms() - 1000
    )
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="new", expiry=now_ms() + HOUR_MS)
    )
    service = _service(repository, oauth_client)

    results = await asyncio.gather(*(service.get_authorized_client(1) for _ in range(3)))

    assert [credentials.token for credentials in results] == ["new", "new", "new"]
    assert oauth_client.refresh_calls == ["R"]


@pytest.mark.asyncio
async def test_user_locks_are_released_after_use() -> None:
    repository = InMemoryCredentialRepository()
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="new", expiry=now_ms() + HOUR_MS)
    )
    for user_id in range(1, 51):
        repository.records[user_id] = StoredCredential(
            access_token="old", refresh_token="R", expiry=now_ms() - 1000
        )
    service = _service(repository, oauth_client)

    await asyncio.gather(*(service.get_authorized_client(u) for u in range(1, 51)))
    gc.collect()

    assert len(oauth_client.refresh_calls) == 50
    assert len(service._locks) == 0


@pytest.mark.asyncio
async def test_exchange_persists_grant_for_state_user() -> None:
    repository = InMemoryCredentialRepository()
    encoder = OAuthStateEncoder("state-secret", ttl_seconds=900)
    expiry = now_ms() + HOUR_MS
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="A", refresh_token="R", expiry=expiry)
    )
    service = _service(repository, oauth_client, encoder)

    stored = await service.exchange_authorization_code(
        "auth-code", encoder.encode({"user_id": 42})
    )

    assert oauth_client.codes == ["auth-code"]
    assert stored == StoredCredential(access_token="A", refresh_token="R", expiry=expiry)
    assert repository.records[42] == stored


@pytest.mark.asyncio
async def test_exchange_without_refresh_token_keeps_previous_one() -> None:
    repository = InMemoryCredentialRepository()
    repository.records[42] = StoredCredential(access_token="x", refresh_token="R", expiry=0)
    encoder = OAuthStateEncoder("state-secret", ttl_seconds=900)
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="A", expiry=now_ms() + HOUR_MS)
    )

    stored = await _service(repository, oauth_client, encoder).exchange_authorization_code(
        "auth-code", encoder.encode({"user_id": 42})
    )

    assert stored.refresh_token == "R"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "state",
    [
        OAuthStateEncoder("other-secret").encode({"user_id": 42}),
        OAuthStateEncoder("state-secret").encode({"nonce": "no-user"}),
        OAuthStateEncoder("state-secret").encode({"user_id": "not-a-number"}),
        "garbage",
    ],
)
async def test_exchange_rejects_bad_state_without_writing(state: str) -> None:
    repository = InMemoryCredentialRepository()
    oauth_client = DummyOAuthClient(
        grant=TokenGrant(access_token="A", refresh_token="R", expiry=now_ms() + HOUR_MS)
    )

    with pytest.raises(InvalidStateError):
        await _service(repository, oauth_client).exchange_authorization_code("code", state)

    assert oauth_client.codes == []
    assert repository.saves == []


@pytest.mark.asyncio
async def test_exchange_failure_writes_nothing() -> None:
    repository = InMemoryCredentialRepository()
    encoder = OAuthStateEncoder("state-secret", ttl_seconds=900)
    oauth_client = DummyOAuthClient(error=CodeExchangeError())

    with pytest.raises(CodeExchangeError):
        await _service(repository, oauth_client, encoder).exchange_authorization_code(
            "code", encoder.encode({"user_id": 42})
        )

    assert repository.saves == []
