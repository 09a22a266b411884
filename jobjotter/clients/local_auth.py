"""Installed-app OAuth consent flow for local development."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from jobjotter.core.errors import InteractiveAuthError
from jobjotter.models.oauth import StoredCredential, to_epoch_ms

logger = logging.getLogger(__name__)


class LocalServerAuthFlow:
    """Run Google's consent screen against a short-lived local callback server."""

    def __init__(
        self,
        *,
        client_secrets_path: Path,
        scopes: Sequence[str],
        port: int,
        timeout_seconds: int,
    ) -> None:
        self._client_secrets_path = client_secrets_path
        self._scopes = list(scopes)
        self._port = port
        self._timeout_seconds = timeout_seconds

    def _run(self) -> Credentials:
        flow = InstalledAppFlow.from_client_secrets_file(
            str(self._client_secrets_path), self._scopes
        )
        return flow.run_local_server(
            port=self._port,
            timeout_seconds=self._timeout_seconds,
            access_type="offline",
            prompt="consent",
        )

    async def authorize(self) -> StoredCredential:
        """Block (in a worker thread) until the user grants consent."""
        logger.info("Starting local Google consent flow on port %s", self._port)
        try:
            credentials = await asyncio.to_thread(self._run)
        except Exception as exc:  # oauthlib, socket and timeout failures alike
            logger.warning("Local Google consent flow failed: %s", exc)
            raise InteractiveAuthError() from exc

        if credentials is None or not credentials.token:
            raise InteractiveAuthError()

        return StoredCredential(
            access_token=credentials.token,
            refresh_token=credentials.refresh_token,
            expiry=to_epoch_ms(credentials.expiry) if credentials.expiry else None,
        )


__all__ = ["LocalServerAuthFlow"]
