"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the data access services
and the Google Calendar integration share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal, Optional

import os

from pydantic import AnyHttpUrl, Field, HttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEVELOPMENT_SECRET_KEY = "your-secret-here"

CALENDAR_SCOPES = (
    "https://www.googleapis.com/auth/calendar.readonly",
    "https://www.googleapis.com/auth/calendar",
)


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


def _split_csv(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


class DatabaseSettings(BaseSettings):
    """Connection settings for the PostgreSQL pool."""

    url: str = Field(
        "postgresql://localhost/job_jotter", validation_alias="DATABASE_URL"
    )
    test_url: str = Field(
        "postgresql://localhost/job_jotter_test", validation_alias="TEST_DATABASE_URL"
    )
    min_pool_size: int = Field(1, validation_alias="DATABASE_MIN_POOL_SIZE")
    max_pool_size: int = Field(10, validation_alias="DATABASE_MAX_POOL_SIZE")
    idle_timeout_seconds: float = Field(
        30.0,
        validation_alias="DATABASE_IDLE_TIMEOUT",
        description="Close pooled connections idle for longer than this.",
    )
    connect_timeout_seconds: float = Field(
        5.0, validation_alias="DATABASE_CONNECT_TIMEOUT"
    )


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    secret_key: str = Field(
        DEVELOPMENT_SECRET_KEY,
        validation_alias="SECRET_KEY",
        description="Shared secret used to sign API tokens and OAuth state.",
    )
    jwt_algorithm: str = Field("HS256", validation_alias="JWT_ALGORITHM")
    bcrypt_work_factor: Optional[int] = Field(
        None,
        validation_alias="BCRYPT_WORK_FACTOR",
        description="bcrypt cost; defaults to 12, or 4 when APP_ENV=test.",
    )
    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )


class GoogleSettings(BaseSettings):
    """Configuration required for interacting with Google APIs."""

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: AnyHttpUrl = Field(..., validation_alias="GOOGLE_REDIRECT_URI")
    credential_mode: Optional[Literal["stored", "interactive"]] = Field(
        None,
        validation_alias="GOOGLE_CREDENTIAL_MODE",
        description=(
            "Where calendar credentials come from. Defaults to 'stored' in "
            "production and 'interactive' elsewhere."
        ),
    )
    token_path: Path = Field(Path("token.json"), validation_alias="GOOGLE_TOKEN_PATH")
    client_secrets_path: Path = Field(
        Path("credentials.json"), validation_alias="GOOGLE_CLIENT_SECRETS_PATH"
    )
    local_auth_port: int = Field(5002, validation_alias="GOOGLE_LOCAL_AUTH_PORT")
    local_auth_timeout_seconds: int = Field(
        120, validation_alias="GOOGLE_LOCAL_AUTH_TIMEOUT"
    )


class OAuthSettings(BaseSettings):
    """OAuth flow configuration."""

    state_ttl_seconds: int = Field(900, validation_alias="OAUTH_STATE_TTL")
    http_timeout_seconds: float = Field(10.0, validation_alias="OAUTH_HTTP_TIMEOUT")
    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        CALENDAR_SCOPES, validation_alias="OAUTH_SCOPES"
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        return _split_csv(value)


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: Literal["development", "test", "production"] = Field(
        "development", validation_alias="APP_ENV"
    )
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    frontend_base_url: Optional[HttpUrl] = Field(
        None,
        validation_alias="FRONTEND_BASE_URL",
        description="Optional URL for redirecting users back to the front-end.",
    )
    cors_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        ("http://localhost:3000",), validation_alias="CORS_ALLOWED_ORIGINS"
    )
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _split_origins(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        return _split_csv(value)

    @model_validator(mode="after")
    def _require_production_secret(self) -> "AppSettings":
        """Refuse to boot production with the development signing secret."""
        if (
            self.environment == "production"
            and self.security.secret_key == DEVELOPMENT_SECRET_KEY
        ):
            raise ValueError("SECRET_KEY is required in production.")
        return self

    @property
    def database_url(self) -> str:
        if self.environment == "test":
            return self.database.test_url
        return self.database.url

    @property
    def bcrypt_work_factor(self) -> int:
        if self.security.bcrypt_work_factor is not None:
            return self.security.bcrypt_work_factor
        return 4 if self.environment == "test" else 12

    @property
    def credential_mode(self) -> str:
        if self.google.credential_mode:
            return self.google.credential_mode
        return "stored" if self.environment == "production" else "interactive"


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "CALENDAR_SCOPES",
    "DatabaseSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SecuritySettings",
    "get_settings",
]
