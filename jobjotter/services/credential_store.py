"""
Persistence for Google OAuth credentials.

Two interchangeable repositories: one backed by the ``users`` table for the
multi-user deployment, one backed by a local ``token.json`` file for
development against a single Google account.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from jobjotter.clients.postgres import Database
from jobjotter.core.errors import InteractiveAuthError, NotFoundError
from jobjotter.models.oauth import StoredCredential, to_epoch_ms
from jobjotter.services.token_cipher import TokenCipherService
from jobjotter.utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

_CREDENTIAL_COLUMNS = {
    "access_token": "google_access_token",
    "refresh_token": "google_refresh_token",
    "expiry": "google_token_expiry",
}

# Every Fernet token starts with the base64 of its 0x80 version byte.
_FERNET_PREFIX = "gAAAAA"


class CredentialRepository(Protocol):
    async def load(self, user_id: int) -> Optional[StoredCredential]: ...

    async def save(self, user_id: int, credential: StoredCredential) -> None: ...


class UserCredentialRepository:
    """Store encrypted tokens in the ``google_*`` columns of the user row."""

    def __init__(self, db: Database, cipher: TokenCipherService) -> None:
        self._db = db
        self._cipher = cipher

    async def load(self, user_id: int) -> Optional[StoredCredential]:
        row = await self._db.fetchrow(
            """SELECT google_access_token,
                      google_refresh_token,
                      google_token_expiry
               FROM users
               WHERE id = $1""",
            user_id,
        )
        if row is None:
            return None

        legacy = False
        tokens = []
        for value in (row["google_access_token"], row["google_refresh_token"]):
            # Rows written before encryption at rest hold the raw provider token.
            if value and not value.startswith(_FERNET_PREFIX):
                legacy = True
                tokens.append(value)
                continue
            try:
                tokens.append(self._cipher.decrypt(value))
            except ValueError:
                logger.warning(
                    "Stored Google tokens for user %s cannot be decrypted; "
                    "the user must reconnect Google Calendar",
                    user_id,
                )
                return None

        access_token, refresh_token = tokens
        credential = StoredCredential(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry=row["google_token_expiry"],
        )
        if legacy:
            await self.save(user_id, credential)
            logger.info("Encrypted legacy plaintext Google tokens for user %s", user_id)
        return credential

    async def save(self, user_id: int, credential: StoredCredential) -> None:
        set_clause, values = sql_for_partial_update(
            {
                "access_token": self._cipher.encrypt(credential.access_token),
                "refresh_token": self._cipher.encrypt(credential.refresh_token),
                "expiry": credential.expiry,
            },
            _CREDENTIAL_COLUMNS,
        )
        user_id_idx = len(values) + 1
        updated = await self._db.fetchrow(
            f"UPDATE users SET {set_clause} WHERE id = ${user_id_idx} RETURNING id",
            *values,
            user_id,
        )
        if updated is None:
            raise NotFoundError(f"No user: {user_id}")


class FileCredentialRepository:
    """Keep a single authorized-user credential in a local JSON file.

    The file follows the ``authorized_user`` layout understood by google-auth,
    with the access token and its expiry (epoch ms) added when known. The
    ``user_id`` argument is ignored: the file belongs to whoever ran the
    local consent flow.
    """

    def __init__(self, token_path: Path, client_secrets_path: Path) -> None:
        self._token_path = Path(token_path)
        self._client_secrets_path = Path(client_secrets_path)

    async def load(self, user_id: int) -> Optional[StoredCredential]:
        try:
            data = json.loads(self._token_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable credential file %s: %s", self._token_path, exc)
            return None

        if not isinstance(data, dict):
            return None
        credential = StoredCredential(
            access_token=data.get("token"),
            refresh_token=data.get("refresh_token"),
            expiry=_parse_expiry(data.get("expiry")),
        )
        if not credential.access_token and not credential.refresh_token:
            return None
        return credential

    def _client_keys(self) -> Dict[str, Any]:
        try:
            secrets = json.loads(self._client_secrets_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise InteractiveAuthError(
                f"Cannot read client secrets from {self._client_secrets_path}."
            ) from exc
        keys = secrets.get("installed") or secrets.get("web")
        if not keys:
            raise InteractiveAuthError("Client secrets file has no OAuth client entry.")
        return keys

    async def save(self, user_id: int, credential: StoredCredential) -> None:
        keys = self._client_keys()
        payload: Dict[str, Any] = {
            "type": "authorized_user",
            "client_id": keys["client_id"],
            "client_secret": keys["client_secret"],
            "refresh_token": credential.refresh_token,
        }
        if credential.access_token:
            payload["token"] = credential.access_token
        if credential.expiry is not None:
            payload["expiry"] = credential.expiry
        self._token_path.write_text(json.dumps(payload), encoding="utf-8")
        logger.info("Saved Google credential to %s", self._token_path)


def _parse_expiry(value: Any) -> Optional[int]:
    """Accept epoch ms or the ISO string written by ``Credentials.to_json``."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return to_epoch_ms(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    except ValueError:
        return None


__all__ = [
    "CredentialRepository",
    "FileCredentialRepository",
    "UserCredentialRepository",
]
