"""Business logic services."""

from .agency_service import AgencyService
from .auth_service import AuthService
