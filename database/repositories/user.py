import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy import select, delete, func

from database.models import User, UserSession
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class UserRepository(BaseRepository):
    def get_by_email(self, email: str) -> Optional[User]:
        """Active, non-deleted user by case-insensitive email."""
        stmt = select(User).where(
            func.lower(User.email) == email.strip().lower(),
            User.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create_user(
        self,
        email: str,
        password_hash: str,
        display_name: Optional[str] = None
    ) -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=password_hash,
            display_name=display_name,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def is_locked(self, user: User, now: Optional[datetime] = None) -> bool:
        locked_until = as_utc(user.locked_until)
        return locked_until is not None and locked_until > (now or utcnow())

    def record_failed_login(
        self,
        user: User,
        max_attempts: int,
        lockout: timedelta,
        now: Optional[datetime] = None
    ) -> None:
        """Count a failed attempt; lock the account once max_attempts is reached."""
        now = now or utcnow()
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
        if user.failed_login_attempts >= max_attempts:
            user.locked_until = now + lockout
            user.failed_login_attempts = 0
            logger.warning(f"User {user.id} locked until {user.locked_until.isoformat()}")

    def record_successful_login(
        self,
        user: User,
        ip_address: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> None:
        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login_at = now or utcnow()
        user.last_login_ip = ip_address

    def create_session(
        self,
        user: User,
        ttl: timedelta,
        now: Optional[datetime] = None
    ) -> UserSession:
        now = now or utcnow()
        session = UserSession(
            user_id=user.id,
            token=secrets.token_urlsafe(32),
            expires_at=now + ttl,
        )
        self.db.add(session)
        self.db.flush()
        return session

    def get_session(self, token: str, now: Optional[datetime] = None) -> Optional[UserSession]:
        """Unexpired session for a token, or None."""
        stmt = select(UserSession).where(UserSession.token == token)
        session = self.db.execute(stmt).scalar_one_or_none()
        if session is None:
            return None
        if as_utc(session.expires_at) <= (now or utcnow()):
            return None
        return session

    def delete_session(self, token: str) -> bool:
        result = self.db.execute(delete(UserSession).where(UserSession.token == token))
        return result.rowcount > 0

    def purge_expired_sessions(self, now: Optional[datetime] = None) -> int:
        result = self.db.execute(
            delete(UserSession).where(UserSession.expires_at <= (now or utcnow()))
        )
        return result.rowcount
