"""Expose dependency helpers for FastAPI routers."""

from .auth import (
    AdminActor,
    CurrentActor,
    get_current_actor,
    get_optional_actor,
    require_admin,
)
from .clients import (
    get_application_service,
    get_auth_token_service,
    get_calendar_authorizer,
    get_calendar_client,
    get_database,
    get_google_oauth_client,
    get_google_token_service,
    get_interview_service,
    get_oauth_state_encoder,
    get_password_hasher,
    get_reminder_service,
    get_token_cipher_service,
    get_user_service,
)
from .config import Settings, get_app_settings

__all__ = [
    "AdminActor",
    "CurrentActor",
    "Settings",
    "get_app_settings",
    "get_application_service",
    "get_auth_token_service",
    "get_calendar_authorizer",
    "get_calendar_client",
    "get_current_actor",
    "get_database",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_interview_service",
    "get_oauth_state_encoder",
    "get_optional_actor",
    "get_password_hasher",
    "get_reminder_service",
    "get_token_cipher_service",
    "get_user_service",
    "require_admin",
]
