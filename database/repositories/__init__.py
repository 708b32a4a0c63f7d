from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
]
