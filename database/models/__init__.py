from .base import Base
from .user import User, UserSession

__all__ = [
    'Base',
    'User',
    'UserSession',
]
