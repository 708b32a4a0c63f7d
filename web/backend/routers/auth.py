#!/usr/bin/env python3
"""
Auth endpoints - sign in, sign out and session state.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from ..dependencies import get_auth_service, get_current_user, get_session_token
from ..services.auth_service import AuthService, SessionUser
from ..models.requests import SignInRequest
from ..models.responses import (
    AuthPageResponse,
    SessionResponse,
    SignInResponse,
    SignOutResponse
)

logger = logging.getLogger(__name__)

HOME_PATH = "/home"
SIGN_IN_PATH = "/api/auth/sign-in"

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(tags=["auth"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


@router.get("/auth", response_model=AuthPageResponse)
def auth_page(
    auth_service: AuthService = Depends(get_auth_service),
    user: Optional[SessionUser] = Depends(get_current_user)
):
    """
    Entry point of the sign-in flow.

    Redirects to the application when a session exists, or unconditionally
    when auth.bypass_sign_in is enabled. Otherwise points at the sign-in API.
    """
    if auth_service.bypass or user is not None:
        return RedirectResponse(url=HOME_PATH, status_code=307)
    return AuthPageResponse(authenticated=False, sign_in_url=SIGN_IN_PATH)


@router.post(SIGN_IN_PATH, response_model=SignInResponse)
@limiter.limit("10/minute")
def sign_in(
    request: Request,
    response: Response,
    body: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Verify email and password and start a session.

    Failed attempts answer with success=false and a message that can be
    shown inline; the caller may retry.
    """
    ip_address = request.client.host if request.client else None
    result = auth_service.sign_in(body.email, body.password, ip_address=ip_address)

    if not result.success:
        return SignInResponse(success=False, error=result.error)

    auth_config = auth_service.config
    response.set_cookie(
        key=auth_config.cookie_name,
        value=result.session_token,
        max_age=result.max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=auth_config.cookie_secure
    )
    return SignInResponse(success=True, redirect_to=HOME_PATH)


@router.post("/api/auth/sign-out", response_model=SignOutResponse)
def sign_out(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    """End the current session."""
    removed = auth_service.sign_out(token)
    response.delete_cookie(auth_service.config.cookie_name)
    return SignOutResponse(success=removed)


@router.get("/api/auth/session", response_model=SessionResponse)
def get_session(
    auth_service: AuthService = Depends(get_auth_service),
    user: Optional[SessionUser] = Depends(get_current_user)
):
    """Current sign-in state."""
    if user is None:
        return SessionResponse(authenticated=auth_service.bypass, bypass=auth_service.bypass)
    return SessionResponse(
        authenticated=True,
        email=user.email,
        display_name=user.display_name,
        bypass=auth_service.bypass
    )
