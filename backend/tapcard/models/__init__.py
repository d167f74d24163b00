"""
Database models for TapCard.

- User: identity upserted from the auth provider
- Profile: the shareable business card
- Connection: directed edge created by a scan or connect action
- ProfileView: append-only visit log
"""

from .connection import Connection
from .profile import Profile
from .profile_view import ProfileView
from .user import User

__all__ = [
    "Connection",
    "Profile",
    "ProfileView",
    "User",
]
