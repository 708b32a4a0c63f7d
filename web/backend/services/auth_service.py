#!/usr/bin/env python3
"""
Auth service - email/password sign-in with server-side sessions.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, ContextManager, Optional

import bcrypt

from core.config_loader import AuthConfig
from database.models import User
from database.repositories.user import UserRepository
from database.uow import user_uow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
ACCOUNT_LOCKED = "Account temporarily locked. Try again later."
UNEXPECTED_ERROR = "An unexpected error occurred. Please check server logs."


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


@dataclass
class SignInResult:
    """Outcome of a sign-in attempt. Failures carry a user-facing message."""
    success: bool
    error: Optional[str] = None
    session_token: Optional[str] = None
    max_age_seconds: Optional[int] = None


@dataclass
class SessionUser:
    """Signed-in user, detached from the database session."""
    user_id: str
    email: str
    display_name: Optional[str] = None


class AuthService:
    """Verifies credentials and manages sign-in sessions."""

    def __init__(
        self,
        config: AuthConfig,
        uow_factory: Callable[[], ContextManager[UserRepository]] = user_uow
    ):
        self.config = config
        self._uow = uow_factory

    @property
    def bypass(self) -> bool:
        return self.config.bypass_sign_in

    def sign_in(self, email: str, password: str, ip_address: Optional[str] = None) -> SignInResult:
        """
        Verify credentials and establish a session.

        Never raises: every failure is reported as
        SignInResult(success=False, error="Login failed: ...").
        """
        try:
            with self._uow() as repo:
                user = repo.get_by_email(email)

                if user is None or not user.is_active:
                    logger.info("Sign-in failed: unknown or inactive account")
                    return self._failure(INVALID_CREDENTIALS)

                if repo.is_locked(user):
                    logger.info(f"Sign-in refused for locked user {user.id}")
                    return self._failure(ACCOUNT_LOCKED)

                if not verify_password(password, user.password_hash):
                    repo.record_failed_login(
                        user,
                        max_attempts=self.config.max_failed_attempts,
                        lockout=timedelta(minutes=self.config.lockout_minutes)
                    )
                    logger.info(f"Sign-in failed: wrong password for user {user.id}")
                    return self._failure(INVALID_CREDENTIALS)

                ttl = timedelta(hours=self.config.session_ttl_hours)
                repo.record_successful_login(user, ip_address=ip_address)
                repo.purge_expired_sessions()
                session = repo.create_session(user, ttl=ttl)
                token = session.token
                user_id = user.id

            logger.info(f"User {user_id} signed in")
            return SignInResult(
                success=True,
                session_token=token,
                max_age_seconds=int(ttl.total_seconds())
            )
        except Exception:
            logger.exception("Unexpected error during sign-in")
            return self._failure(UNEXPECTED_ERROR)

    def sign_out(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._uow() as repo:
            return repo.delete_session(token)

    def resolve_session(self, token: Optional[str]) -> Optional[SessionUser]:
        """Return the signed-in user for a token, or None if missing or expired."""
        if not token:
            return None
        with self._uow() as repo:
            session = repo.get_session(token)
            if session is None:
                return None
            user: User = session.user
            if not user.is_active or user.deleted_at is not None:
                return None
            return SessionUser(user_id=user.id, email=user.email, display_name=user.display_name)

    def create_user(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        """Create an account and return its id."""
        with self._uow() as repo:
            user = repo.create_user(email, hash_password(password), display_name=display_name)
            return user.id

    @staticmethod
    def _failure(message: str) -> SignInResult:
        return SignInResult(success=False, error=f"Login failed: {message}")
