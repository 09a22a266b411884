"""
Domain models for OAuth token persistence.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to epoch ms; naive values are UTC, as in google-auth."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch ms to the naive UTC datetime google-auth expects."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)


class StoredCredential(BaseModel):
    """Google tokens persisted for a single user."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[int] = Field(
        None, description="Access token expiry as epoch milliseconds."
    )

    def is_valid(self, at_ms: int | None = None) -> bool:
        """True while the access token may be used without a refresh."""
        if not self.access_token or self.expiry is None:
            return False
        return (now_ms() if at_ms is None else at_ms) < self.expiry


class TokenGrant(BaseModel):
    """Normalized token endpoint response."""

    access_token: str
    refresh_token: Optional[str] = None
    expiry: int = Field(..., description="Epoch milliseconds.")

    def merged_with(self, previous: StoredCredential | None) -> StoredCredential:
        """Fold the grant into a stored credential, keeping an omitted refresh token."""
        refresh_token = self.refresh_token
        if not refresh_token and previous is not None:
            refresh_token = previous.refresh_token
        return StoredCredential(
            access_token=self.access_token,
            refresh_token=refresh_token,
            expiry=self.expiry,
        )


__all__ = [
    "StoredCredential",
    "TokenGrant",
    "from_epoch_ms",
    "now_ms",
    "to_epoch_ms",
]
