"""
Pydantic schemas for connections.

Defines request and response models for the connection endpoints.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel, CamelRequestModel
from .profile import ProfileResponse
from .user import UserResponse

ScanMethod = Literal["nfc", "qr", "link"]


class ConnectionCreate(CamelRequestModel):
    """Body of POST /api/connections. The source user is the caller."""

    to_user_id: str = Field(..., min_length=1)
    to_profile_id: Optional[int] = None
    scan_method: ScanMethod = "link"
    notes: Optional[str] = None


class ConnectionResponse(CamelModel):
    """A connection edge."""

    id: int
    from_user_id: str
    to_user_id: str
    to_profile_id: Optional[int] = None
    is_favorite: bool = False
    scan_method: Optional[str] = None
    notes: Optional[str] = None
    connected_at: datetime


class ConnectionWithDetails(ConnectionResponse):
    """Connection joined with its target user and (if any) target profile."""

    to_user: Optional[UserResponse] = None
    to_profile: Optional[ProfileResponse] = None


class FavoriteToggleResponse(CamelModel):
    """Response for the favorite toggle; identical whether or not anything changed."""

    success: bool = True
