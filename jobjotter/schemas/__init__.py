"""Public schema exports."""

from .applications import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    InterviewCreateRequest,
    InterviewUpdateRequest,
    ReminderCreateRequest,
    ReminderUpdateRequest,
)
from .auth import (
    AuthorizationUrlResponse,
    LoginRequest,
    OAuthCallbackPayload,
    OAuthConnectedResponse,
    RegisterRequest,
    TokenResponse,
)
from .calendar import CalendarEventRequest, CalendarEventUpdateRequest, EventTime
from .users import UserCreateRequest, UserUpdateRequest

__all__ = [
    "ApplicationCreateRequest",
    "ApplicationUpdateRequest",
    "AuthorizationUrlResponse",
    "CalendarEventRequest",
    "CalendarEventUpdateRequest",
    "EventTime",
    "InterviewCreateRequest",
    "InterviewUpdateRequest",
    "LoginRequest",
    "OAuthCallbackPayload",
    "OAuthConnectedResponse",
    "RegisterRequest",
    "ReminderCreateRequest",
    "ReminderUpdateRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserUpdateRequest",
]
