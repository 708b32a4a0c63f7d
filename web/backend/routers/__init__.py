"""API route handlers."""

from .auth import router as auth_router
from .discover import router as discover_router
from .trending import router as trending_router
from .overview import router as overview_router
