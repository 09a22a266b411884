"""
Login, registration and Google account connection routes.
"""

from __future__ import annotations

import logging
import uuid
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import RedirectResponse

from jobjotter.clients.google_auth import GoogleOAuthClient, OAuthStateEncoder
from jobjotter.core.errors import UnauthorizedError
from jobjotter.dependencies import (
    Settings,
    get_auth_token_service,
    get_google_oauth_client,
    get_google_token_service,
    get_oauth_state_encoder,
    get_optional_actor,
    get_user_service,
)
from jobjotter.models.users import Actor
from jobjotter.schemas import (
    AuthorizationUrlResponse,
    LoginRequest,
    OAuthCallbackPayload,
    OAuthConnectedResponse,
    RegisterRequest,
    TokenResponse,
)
from jobjotter.services import AuthTokenService, GoogleTokenService, UserService

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


@router.post("/token", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
    tokens: Annotated[AuthTokenService, Depends(get_auth_token_service)],
) -> TokenResponse:
    """Exchange a username and password for an API token."""
    user = await users.authenticate(payload.username, payload.password)
    return TokenResponse(token=tokens.create_token(user))


@router.post("/register", response_model=TokenResponse, status_code=HTTPStatus.CREATED)
async def register(
    payload: RegisterRequest,
    users: Annotated[UserService, Depends(get_user_service)],
    tokens: Annotated[AuthTokenService, Depends(get_auth_token_service)],
) -> TokenResponse:
    """Create a regular account and log it in."""
    user = await users.register(
        username=payload.username,
        password=payload.password,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return TokenResponse(token=tokens.create_token(user))


@router.get("/google/authorize", response_model=None)
async def start_google_oauth_flow(
    request: Request,
    actor: Annotated[Optional[Actor], Depends(get_optional_actor)],
    tokens: Annotated[AuthTokenService, Depends(get_auth_token_service)],
    oauth_client: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    state_encoder: Annotated[OAuthStateEncoder, Depends(get_oauth_state_encoder)],
    token: Optional[str] = Query(
        default=None,
        description="API token for browsers that cannot send an Authorization header.",
    ),
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the Google consent screen.",
    ),
) -> Response | AuthorizationUrlResponse:
    """
    Kick off the OAuth flow by generating a state token and authorization URL.
    """
    if actor is None and token:
        actor = tokens.decode(token)
    if actor is None or actor.id is None:
        raise UnauthorizedError("Must be logged in.")

    state = state_encoder.encode({"nonce": uuid.uuid4().hex, "user_id": actor.id})
    authorization_url = oauth_client.build_authorization_url(state=state)

    if redirect or _wants_html(request):
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return AuthorizationUrlResponse(authorization_url=authorization_url, state=state)


@router.post("/google/callback", response_model=OAuthConnectedResponse)
async def handle_google_oauth_callback(
    payload: OAuthCallbackPayload,
    token_service: Annotated[GoogleTokenService, Depends(get_google_token_service)],
    settings: Settings,
) -> OAuthConnectedResponse:
    """Complete the OAuth exchange and store the user's tokens."""
    await token_service.exchange_authorization_code(payload.code, payload.state)
    redirect_to = str(settings.frontend_base_url) if settings.frontend_base_url else None
    return OAuthConnectedResponse(redirect_to=redirect_to)


@router.get("/google/callback", response_model=None)
async def handle_google_oauth_callback_get(
    request: Request,
    token_service: Annotated[GoogleTokenService, Depends(get_google_token_service)],
    settings: Settings,
    state: str = Query(..., description="OAuth state token."),
    code: str = Query(..., description="Authorization code returned by Google."),
    redirect: bool = Query(
        default=False,
        description="When true, redirect browser clients instead of returning JSON.",
    ),
) -> Any:
    result = await handle_google_oauth_callback(
        payload=OAuthCallbackPayload(state=state, code=code),
        token_service=token_service,
        settings=settings,
    )

    redirect_target = settings.frontend_base_url
    if redirect_target and (redirect or _wants_html(request)):
        return RedirectResponse(url=str(redirect_target), status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return result


__all__ = ["router"]
