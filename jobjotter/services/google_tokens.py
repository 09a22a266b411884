"""
Helpers for obtaining, refreshing and persisting Google OAuth credentials.

``GoogleTokenService`` serves deployed, multi-user setups from stored tokens;
``LocalGoogleAuthorizer`` serves local development through the installed-app
consent flow. Both hand back a ``google.oauth2.credentials.Credentials`` handle
ready for the Calendar API.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Protocol

from google.oauth2.credentials import Credentials

from jobjotter.clients.google_auth import GoogleOAuthClient, OAuthStateEncoder
from jobjotter.clients.local_auth import LocalServerAuthFlow
from jobjotter.core.config import GoogleSettings, OAuthSettings
from jobjotter.core.errors import (
    InvalidStateError,
    NoStoredCredentialError,
    TokenRefreshError,
)
from jobjotter.models.oauth import StoredCredential, from_epoch_ms
from jobjotter.services.credential_store import CredentialRepository

logger = logging.getLogger(__name__)


class CalendarAuthorizer(Protocol):
    async def get_authorized_client(self, user_id: int) -> Credentials: ...


def build_credentials(
    credential: StoredCredential,
    google_settings: GoogleSettings,
    oauth_settings: OAuthSettings,
) -> Credentials:
    return Credentials(
        token=credential.access_token,
        refresh_token=credential.refresh_token,
        token_uri=GoogleOAuthClient.TOKEN_URL,
        client_id=google_settings.client_id,
        client_secret=google_settings.client_secret,
        scopes=list(oauth_settings.scopes),
        expiry=from_epoch_ms(credential.expiry) if credential.expiry is not None else None,
    )


class GoogleTokenService:
    """Manages access to persisted Google OAuth tokens.

    Refreshes are serialized per user within this process. Separate processes
    refreshing the same user concurrently still race, and the last write wins.
    """

    def __init__(
        self,
        repository: CredentialRepository,
        oauth_client: GoogleOAuthClient,
        state_encoder: OAuthStateEncoder,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
    ) -> None:
        self._repository = repository
        self._oauth = oauth_client
        self._state_encoder = state_encoder
        self._google = google_settings
        self._oauth_settings = oauth_settings
        # A lock lives only while some request holds or awaits it.
        self._locks: weakref.WeakValueDictionary[int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, user_id: int) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    async def get_authorized_client(self, user_id: int) -> Credentials:
        """Return credentials for a user, refreshing the access token when expired."""
        async with self._lock_for(user_id):
            credential = await self._repository.load(user_id)
            if credential is None or not credential.access_token:
                raise NoStoredCredentialError()
            if not credential.is_valid():
                credential = await self._refresh(user_id, credential)
        return build_credentials(credential, self._google, self._oauth_settings)

    async def _refresh(
        self, user_id: int, credential: StoredCredential
    ) -> StoredCredential:
        if not credential.refresh_token:
            logger.warning("User %s has an expired token and no refresh token", user_id)
            raise TokenRefreshError()

        grant = await self._oauth.refresh_token(credential.refresh_token)
        refreshed = grant.merged_with(credential)
        await self._repository.save(user_id, refreshed)
        logger.info("Refreshed Google access token for user %s", user_id)
        return refreshed

    async def exchange_authorization_code(self, code: str, state: str) -> StoredCredential:
        """Complete the consent redirect: verify ``state`` and persist the tokens."""
        payload = self._state_encoder.decode(state)
        try:
            user_id = int(payload["user_id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidStateError() from exc

        grant = await self._oauth.exchange_authorization_code(code)

        async with self._lock_for(user_id):
            previous = None
            if not grant.refresh_token:
                previous = await self._repository.load(user_id)
            credential = grant.merged_with(previous)
            await self._repository.save(user_id, credential)

        logger.info("Stored Google credentials for user %s", user_id)
        return credential


class LocalGoogleAuthorizer:
    """Reuse the saved local credential, or run the consent flow to create it."""

    def __init__(
        self,
        repository: CredentialRepository,
        auth_flow: LocalServerAuthFlow,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
    ) -> None:
        self._repository = repository
        self._auth_flow = auth_flow
        self._google = google_settings
        self._oauth_settings = oauth_settings
        self._lock = asyncio.Lock()

    async def get_authorized_client(self, user_id: int) -> Credentials:
        async with self._lock:
            credential = await self._repository.load(user_id)
            if credential is None:
                credential = await self._auth_flow.authorize()
                await self._repository.save(user_id, credential)
        # google-auth refreshes an expired access token on first use
        return build_credentials(credential, self._google, self._oauth_settings)


__all__ = [
    "CalendarAuthorizer",
    "GoogleTokenService",
    "LocalGoogleAuthorizer",
    "build_credentials",
]
