"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient, OAuthStateEncoder
from .google_calendar import GoogleCalendarClient
from .local_auth import LocalServerAuthFlow
from .postgres import Database

__all__ = [
    "Database",
    "GoogleCalendarClient",
    "GoogleOAuthClient",
    "LocalServerAuthFlow",
    "OAuthStateEncoder",
]
