import uuid

from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, ForeignKey, func, Index
from sqlalchemy.orm import relationship

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account with authentication and audit fields.
    """
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    display_name = Column(Text)

    is_active = Column(Boolean, nullable=False, default=True)

    # Brute force protection
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime(timezone=True))

    # Audit
    last_login_at = Column(DateTime(timezone=True))
    last_login_ip = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True))

    # Relationships
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_email', 'email'),
    )


class UserSession(Base):
    """
    Server-side sign-in session, addressed by an opaque random token.
    """
    __tablename__ = 'user_sessions'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    token = Column(String(128), nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="sessions")

    __table_args__ = (
        Index('idx_user_sessions_token', 'token'),
        Index('idx_user_sessions_user', 'user_id'),
    )
