"""
Google OAuth utilities.

These helpers sign the OAuth state round-trip and talk to Google's token
endpoint for authorization-code and refresh-token grants.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from datetime import datetime, timedelta, timezone
from hashlib import sha256
from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from fastapi import status

from jobjotter.core.config import GoogleSettings, OAuthSettings
from jobjotter.core.errors import CodeExchangeError, InvalidStateError, TokenRefreshError
from jobjotter.models.oauth import TokenGrant, now_ms

logger = logging.getLogger(__name__)

_SIGNATURE_SIZE = 32


class OAuthStateEncoder:
    """Encode and decode OAuth state values to guard against tampering."""

    def __init__(self, secret_key: str, ttl_seconds: int | None = None) -> None:
        self._secret_key = secret_key.encode("utf-8")
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def encode(self, payload: Dict[str, Any]) -> str:
        body = dict(payload)
        body.setdefault("issued_at", datetime.now(timezone.utc).isoformat())
        serialized = json.dumps(body, separators=(",", ":"), sort_keys=True)
        signature = hmac.new(self._secret_key, serialized.encode("utf-8"), sha256).digest()
        return base64.urlsafe_b64encode(signature + serialized.encode("utf-8")).decode("utf-8")

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify and return the payload; any failure is an ``InvalidStateError``."""
        try:
            decoded = base64.urlsafe_b64decode(token.encode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise InvalidStateError() from exc

        signature, serialized = decoded[:_SIGNATURE_SIZE], decoded[_SIGNATURE_SIZE:]
        expected_signature = hmac.new(self._secret_key, serialized, sha256).digest()
        if not hmac.compare_digest(signature, expected_signature):
            logger.warning("Rejected OAuth state with a bad signature")
            raise InvalidStateError()

        try:
            payload = json.loads(serialized)
            issued_at = datetime.fromisoformat(payload["issued_at"])
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidStateError() from exc

        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        if self._ttl is not None and datetime.now(timezone.utc) - issued_at > self._ttl:
            logger.info("Rejected expired OAuth state")
            raise InvalidStateError()
        return payload


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange codes and refresh tokens."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    def build_authorization_url(self, state: str, access_type: str = "offline") -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": str(self._google.redirect_uri),
            "response_type": "code",
            "scope": " ".join(self._oauth.scopes),
            "access_type": access_type,
            "include_granted_scopes": "true",
            "prompt": "consent",
            "state": state,
        }
        query = urlencode(params)
        return f"{self.AUTH_BASE_URL}?{query}"

    async def _post_token_request(self, payload: Dict[str, str]) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self._oauth.http_timeout_seconds, transport=self._transport
        ) as client:
            response = await client.post(self.TOKEN_URL, data=payload)

        if response.status_code != status.HTTP_200_OK:
            raise httpx.HTTPStatusError(
                f"Token endpoint returned {response.status_code}: {response.text}",
                request=response.request,
                response=response,
            )
        return response.json()

    @staticmethod
    def _to_grant(token_payload: Dict[str, Any], requested_at_ms: int) -> TokenGrant | None:
        access_token = token_payload.get("access_token")
        expires_in = token_payload.get("expires_in")
        if not access_token or not expires_in:
            return None
        return TokenGrant(
            access_token=access_token,
            refresh_token=token_payload.get("refresh_token"),
            expiry=requested_at_ms + int(expires_in) * 1000,
        )

    async def exchange_authorization_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code for an access/refresh token pair."""
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": str(self._google.redirect_uri),
            "grant_type": "authorization_code",
        }
        requested_at = now_ms()
        try:
            token_payload = await self._post_token_request(payload)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Authorization code exchange failed: %s", exc)
            raise CodeExchangeError() from exc

        grant = self._to_grant(token_payload, requested_at)
        if grant is None:
            logger.warning("Incomplete token payload returned from Google")
            raise CodeExchangeError()
        return grant

    async def refresh_token(self, refresh_token: str) -> TokenGrant:
        """Refresh the access token using a stored refresh token."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        requested_at = now_ms()
        try:
            token_payload = await self._post_token_request(payload)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Access token refresh failed: %s", exc)
            raise TokenRefreshError() from exc

        grant = self._to_grant(token_payload, requested_at)
        if grant is None:
            logger.warning("Incomplete refresh payload returned from Google")
            raise TokenRefreshError()
        return grant


__all__ = ["GoogleOAuthClient", "OAuthStateEncoder"]
