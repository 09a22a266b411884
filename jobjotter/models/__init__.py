"""Domain models returned by the data access services."""

from .applications import (
    Application,
    ApplicationDetail,
    ApplicationSummary,
    Interview,
    Reminder,
)
from .oauth import StoredCredential, TokenGrant
from .users import Actor, User, UserWithApplications

__all__ = [
    "Actor",
    "Application",
    "ApplicationDetail",
    "ApplicationSummary",
    "Interview",
    "Reminder",
    "StoredCredential",
    "TokenGrant",
    "User",
    "UserWithApplications",
]
