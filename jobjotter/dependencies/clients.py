"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from jobjotter.clients import (
    Database,
    GoogleCalendarClient,
    GoogleOAuthClient,
    LocalServerAuthFlow,
    OAuthStateEncoder,
)
from jobjotter.core.config import get_settings
from jobjotter.services import (
    ApplicationService,
    AuthTokenService,
    CalendarAuthorizer,
    FileCredentialRepository,
    GoogleTokenService,
    InterviewService,
    LocalGoogleAuthorizer,
    PasswordHasher,
    ReminderService,
    TokenCipherService,
    UserCredentialRepository,
    UserService,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_database() -> Database:
    """Provide the process-wide connection pool wrapper."""
    settings = _settings()
    return Database(settings.database_url, settings.database)


@lru_cache()
def get_oauth_state_encoder() -> OAuthStateEncoder:
    """Provide an OAuth state encoder signed with the application secret."""
    settings = _settings()
    return OAuthStateEncoder(
        secret_key=settings.security.secret_key,
        ttl_seconds=settings.oauth.state_ttl_seconds,
    )


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_calendar_client() -> GoogleCalendarClient:
    return GoogleCalendarClient()


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for token storage."""
    settings = _settings()
    secret = settings.security.token_encryption_secret or settings.security.secret_key
    return TokenCipherService(secret=secret)


@lru_cache()
def get_auth_token_service() -> AuthTokenService:
    settings = _settings()
    return AuthTokenService(
        secret_key=settings.security.secret_key,
        algorithm=settings.security.jwt_algorithm,
    )


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(work_factor=_settings().bcrypt_work_factor)


@lru_cache()
def get_google_token_service() -> GoogleTokenService:
    """Provide the stored-credential token manager."""
    settings = _settings()
    return GoogleTokenService(
        repository=UserCredentialRepository(get_database(), get_token_cipher_service()),
        oauth_client=get_google_oauth_client(),
        state_encoder=get_oauth_state_encoder(),
        google_settings=settings.google,
        oauth_settings=settings.oauth,
    )


@lru_cache()
def get_calendar_authorizer() -> CalendarAuthorizer:
    """Pick the credential source for calendar calls from configuration."""
    settings = _settings()
    if settings.credential_mode == "stored":
        return get_google_token_service()

    google = settings.google
    return LocalGoogleAuthorizer(
        repository=FileCredentialRepository(google.token_path, google.client_secrets_path),
        auth_flow=LocalServerAuthFlow(
            client_secrets_path=google.client_secrets_path,
            scopes=settings.oauth.scopes,
            port=google.local_auth_port,
            timeout_seconds=google.local_auth_timeout_seconds,
        ),
        google_settings=google,
        oauth_settings=settings.oauth,
    )


def get_user_service() -> UserService:
    return UserService(get_database(), get_password_hasher())


def get_application_service() -> ApplicationService:
    return ApplicationService(get_database())


def get_interview_service() -> InterviewService:
    return InterviewService(get_database())


def get_reminder_service() -> ReminderService:
    return ReminderService(get_database())


__all__ = [
    "get_application_service",
    "get_auth_token_service",
    "get_calendar_authorizer",
    "get_calendar_client",
    "get_database",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_interview_service",
    "get_oauth_state_encoder",
    "get_password_hasher",
    "get_reminder_service",
    "get_token_cipher_service",
    "get_user_service",
]
