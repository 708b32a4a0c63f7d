#!/usr/bin/env python3
"""
Unit tests for UserRepository against an in-memory SQLite database.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from database.repositories.user import UserRepository, as_utc, utcnow
from database.uow import repository_scope


class TestUserRepository:

    def test_create_and_get_by_email_case_insensitive(self, uow_factory):
        with uow_factory() as repo:
            repo.create_user("Ada@Example.com", "hash", display_name="Ada")

        with uow_factory() as repo:
            user = repo.get_by_email("  ada@EXAMPLE.com ")
            assert user is not None
            assert user.email == "ada@example.com"
            assert user.failed_login_attempts == 0
            assert user.is_active

    def test_deleted_user_not_found(self, uow_factory):
        with uow_factory() as repo:
            user = repo.create_user("gone@example.com", "hash")
            user.deleted_at = utcnow()

        with uow_factory() as repo:
            assert repo.get_by_email("gone@example.com") is None

    def test_lockout_after_max_attempts(self, uow_factory):
        now = utcnow()
        with uow_factory() as repo:
            user = repo.create_user("a@example.com", "hash")
            for _ in range(4):
                repo.record_failed_login(user, max_attempts=5, lockout=timedelta(minutes=15), now=now)
            assert not repo.is_locked(user, now=now)

            repo.record_failed_login(user, max_attempts=5, lockout=timedelta(minutes=15), now=now)
            assert repo.is_locked(user, now=now)
            assert not repo.is_locked(user, now=now + timedelta(minutes=16))
            assert user.failed_login_attempts == 0

    def test_successful_login_resets_counters(self, uow_factory):
        with uow_factory() as repo:
            user = repo.create_user("a@example.com", "hash")
            repo.record_failed_login(user, max_attempts=5, lockout=timedelta(minutes=15))
            repo.record_successful_login(user, ip_address="10.0.0.1")

            assert user.failed_login_attempts == 0
            assert user.locked_until is None
            assert user.last_login_ip == "10.0.0.1"

    def test_session_lifecycle(self, uow_factory):
        with uow_factory() as repo:
            user = repo.create_user("a@example.com", "hash")
            token = repo.create_session(user, ttl=timedelta(hours=24)).token

        with uow_factory() as repo:
            session = repo.get_session(token)
            assert session is not None
            assert session.user.email == "a@example.com"
            assert as_utc(session.expires_at) > utcnow()

        with uow_factory() as repo:
            assert repo.delete_session(token)
            assert not repo.delete_session(token)
            assert repo.get_session(token) is None

    def test_expired_session_is_ignored_and_purged(self, uow_factory):
        with uow_factory() as repo:
            user = repo.create_user("a@example.com", "hash")
            past = utcnow() - timedelta(days=2)
            token = repo.create_session(user, ttl=timedelta(hours=1), now=past).token

        with uow_factory() as repo:
            assert repo.get_session(token) is None
            assert repo.purge_expired_sessions() == 1

    def test_unknown_token(self, uow_factory):
        with uow_factory() as repo:
            assert repo.get_session("nope") is None

    def test_rollback_on_error(self, uow_factory):
        with pytest.raises(RuntimeError):
            with uow_factory() as repo:
                repo.create_user("rolled@example.com", "hash")
                raise RuntimeError("abort")

        with uow_factory() as repo:
            assert repo.get_by_email("rolled@example.com") is None


class TestRepositoryScope:

    def test_commits_and_closes(self):
        session = MagicMock()
        with repository_scope(UserRepository, lambda: session) as repo:
            assert repo.db is session

        session.commit.assert_called_once()
        session.rollback.assert_not_called()
        session.close.assert_called_once()

    def test_rolls_back_and_closes_on_error(self):
        session = MagicMock()
        with pytest.raises(ValueError):
            with repository_scope(UserRepository, lambda: session):
                raise ValueError("boom")

        session.commit.assert_not_called()
        session.rollback.assert_called_once()
        session.close.assert_called_once()
