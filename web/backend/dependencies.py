#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Optional

from fastapi import Depends, Request

from core.app_context import AppContext
from .exceptions import NotAuthenticatedException
from .services.agency_service import AgencyService
from .services.auth_service import AuthService, SessionUser

BYPASS_USER = SessionUser(user_id="bypass", email="anonymous@localhost", display_name="Guest")


def get_app_context(request: Request) -> AppContext:
    """The AppContext built in the application lifespan."""
    return request.app.state.context


def get_agency_service(context: AppContext = Depends(get_app_context)) -> AgencyService:
    """
    FastAPI dependency that yields the agency service.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(service: AgencyService = Depends(get_agency_service)):
            ...
    """
    scoring = context.config.scoring
    return AgencyService(
        seeds=context.seeds,
        enricher=context.enricher,
        match_limit=scoring.match_limit,
        page_size=scoring.page_size,
        debounce_seconds=scoring.debounce_seconds
    )


def get_auth_service(context: AppContext = Depends(get_app_context)) -> AuthService:
    return AuthService(context.config.auth)


def get_session_token(request: Request, context: AppContext = Depends(get_app_context)) -> Optional[str]:
    """Session token from the cookie, or from an "Authorization: Bearer" header."""
    token = request.cookies.get(context.config.auth.cookie_name)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[SessionUser]:
    return auth_service.resolve_session(token)


def require_session(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> SessionUser:
    """
    Gate for the matcher and trending views.

    Raises:
        NotAuthenticatedException: If there is no valid session and the
            sign-in bypass is disabled.
    """
    if auth_service.bypass:
        return BYPASS_USER
    user = auth_service.resolve_session(token)
    if user is None:
        raise NotAuthenticatedException("Sign in required")
    return user
