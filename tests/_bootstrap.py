"""Environment defaults applied before anything imports ``jobjotter``."""

from __future__ import annotations

import os

# Settings are cached on first use; these must be in place before then.
TEST_ENVIRONMENT: dict[str, str] = {
    "APP_ENV": "test",
    "SECRET_KEY": "test-signing-secret",
    "TOKEN_ENCRYPTION_SECRET": "test-secret",
    "GOOGLE_CLIENT_ID": "test-client-id",
    "GOOGLE_CLIENT_SECRET": "test-client-secret",
    "GOOGLE_REDIRECT_URI": "https://example.com/oauth/callback",
    "GOOGLE_CREDENTIAL_MODE": "stored",
}

for key, value in TEST_ENVIRONMENT.items():
    os.environ.setdefault(key, value)
