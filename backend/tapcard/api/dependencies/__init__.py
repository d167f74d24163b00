"""FastAPI dependencies shared by the route modules."""

from .auth import get_current_user, get_current_user_optional
from ...database import get_db
from .services import (
    get_analytics_service,
    get_connection_service,
    get_profile_service,
    get_profile_view_service,
    get_scan_service,
)

__all__ = [
    "get_analytics_service",
    "get_connection_service",
    "get_current_user",
    "get_current_user_optional",
    "get_db",
    "get_profile_service",
    "get_profile_view_service",
    "get_scan_service",
]
