import contextlib
import logging
from typing import Callable, ContextManager, Iterator, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository

logger = logging.getLogger(__name__)

RepoT = TypeVar("RepoT", bound=BaseRepository)
SessionFactory = Callable[[], Session]


@contextlib.contextmanager
def repository_scope(
    repository_cls: Type[RepoT],
    session_factory: Optional[SessionFactory] = None
) -> Iterator[RepoT]:
    """Per-unit-of-work transaction scope.

    Yields a repository bound to a fresh Session from ``session_factory``
    (the configured SessionLocal by default). Commits on success, rolls
    back on exception, always closes.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield repository_cls(session)
        session.commit()
    except Exception:
        logger.debug(f"Rolling back {repository_cls.__name__} unit of work")
        session.rollback()
        raise
    finally:
        session.close()


def user_uow(session_factory: Optional[SessionFactory] = None) -> ContextManager[UserRepository]:
    """
    Usage:
        with user_uow() as repo:
            user = repo.get_by_email(email)
            # perform operations...
        # commit happens automatically on successful exit
    """
    return repository_scope(UserRepository, session_factory)
