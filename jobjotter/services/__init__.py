"""Service layer exports."""

from .access import can_access, ensure_access
from .applications import ApplicationService
from .auth_tokens import AuthTokenService
from .credential_store import (
    CredentialRepository,
    FileCredentialRepository,
    UserCredentialRepository,
)
from .google_tokens import CalendarAuthorizer, GoogleTokenService, LocalGoogleAuthorizer
from .interviews import InterviewService
from .passwords import PasswordHasher
from .reminders import ReminderService
from .token_cipher import TokenCipherService
from .users import UserService

__all__ = [
    "ApplicationService",
    "AuthTokenService",
    "CalendarAuthorizer",
    "CredentialRepository",
    "FileCredentialRepository",
    "GoogleTokenService",
    "InterviewService",
    "LocalGoogleAuthorizer",
    "PasswordHasher",
    "ReminderService",
    "TokenCipherService",
    "UserCredentialRepository",
    "UserService",
    "can_access",
    "ensure_access",
]
