"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import os
from functools import partial

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base
from database.uow import user_uow


@pytest.fixture
def session_factory():
    """Fresh in-memory SQLite database per test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def uow_factory(session_factory):
    """user_uow bound to the in-memory database."""
    return partial(user_uow, session_factory)


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Sign-in rate limiting is global per process; keep tests independent of it."""
    from web.backend.routers.auth import limiter
    limiter.enabled = False
    yield
    limiter.enabled = True
