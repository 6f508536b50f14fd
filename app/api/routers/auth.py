"""
Login flow with Google and the cookie-borne session.
"""

import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.dependencies import (
    OptionalUserId,
    get_identity_provider,
    get_sync_identity_use_case,
    get_user_use_case,
)
from app.api.schemas.base import MessageResponse
from app.api.schemas.user_io import UserResponse
from app.application.ports import IdentityProviderPort
from app.application.use_cases import GetUserUseCase, SyncIdentityUseCase
from app.domain_core.exceptions import DomainError, NotFoundError
from app.infra.auth.google_oauth import IdentityProviderError
from app.infra.auth.jwt_auth import JWTAuth
from app.infra.config.settings import Settings, get_settings
from app.infra.config.logging_config import get_logger

router = APIRouter(prefix="/auth", tags=["auth"])
log = get_logger("api.auth")

OAUTH_STATE_COOKIE = "oauth_state"


@router.get("/google")
async def login_with_google(
    provider: IdentityProviderPort = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Send the browser to Google's consent screen."""
    state = secrets.token_urlsafe(24)
    response = RedirectResponse(provider.authorization_url(state))
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


@router.get("/callback")
async def oauth_callback(
    request: Request,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    provider: IdentityProviderPort = Depends(get_identity_provider),
    use_case: SyncIdentityUseCase = Depends(get_sync_identity_use_case),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """
    Finish the login and hand the browser back to the frontend.

    Any failure (missing code, state mismatch, provider rejection, profile
    store error) redirects without opening a session.
    """
    response = RedirectResponse(settings.frontend_url, status_code=302)
    response.delete_cookie(OAUTH_STATE_COOKIE)

    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    if not code or not state or not expected_state or not secrets.compare_digest(
        state, expected_state
    ):
        log.warning("auth.callback.rejected", has_code=bool(code))
        return response

    try:
        profile = await provider.fetch_profile(code)
    except IdentityProviderError as e:
        log.warning("auth.callback.provider_failed", error=str(e))
        return response

    try:
        user = await use_case.execute(profile)
    except DomainError as e:
        log.error("auth.callback.sync_failed", code=e.code, error=e.message)
        return response

    sessions = JWTAuth(settings)
    token = sessions.create_access_token(user.id)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=sessions.max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    log.info("auth.callback.success", user_id=str(user.id))
    return response


@router.get("/current_user")
async def current_user(
    caller_id: OptionalUserId,
    use_case: GetUserUseCase = Depends(get_user_use_case),
) -> JSONResponse:
    """The logged-in user, or ``false`` for anonymous callers."""
    if caller_id is None:
        return JSONResponse(content=False)
    try:
        user = await use_case.execute(caller_id)
    except NotFoundError:
        return JSONResponse(content=False)
    return JSONResponse(
        content=UserResponse.from_entity(user).model_dump(by_alias=True, mode="json")
    )


@router.get("/logout", response_model=MessageResponse)
async def logout(settings: Settings = Depends(get_settings)) -> JSONResponse:
    response = JSONResponse(content={"message": "Logged out successfully"})
    response.delete_cookie(settings.session_cookie_name)
    return response
