"""Schemas related to authentication and OAuth flows."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from jobjotter.schemas.base import RequestModel


class LoginRequest(RequestModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=72)


class RegisterRequest(RequestModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class TokenResponse(BaseModel):
    token: str


class OAuthCallbackPayload(BaseModel):
    """Payload sent to complete the OAuth callback exchange."""

    code: str = Field(..., description="Authorization code returned by Google OAuth.")
    state: str = Field(..., description="Opaque state token issued when starting OAuth.")


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str
    state: str


class OAuthConnectedResponse(BaseModel):
    status: str = "connected"
    redirect_to: Optional[str] = None


__all__ = [
    "AuthorizationUrlResponse",
    "LoginRequest",
    "OAuthCallbackPayload",
    "OAuthConnectedResponse",
    "RegisterRequest",
    "TokenResponse",
]
