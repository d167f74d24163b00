"""Pydantic schemas for profile views."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, CamelRequestModel


class ProfileViewCreate(CamelRequestModel):
    """Body of POST /api/profile/{id}/view."""

    viewer_location: Optional[str] = Field(None, max_length=255)
    view_duration: Optional[int] = Field(None, ge=0, description="Seconds spent on the page")


class ProfileViewResponse(CamelModel):
    """A recorded profile view."""

    id: int
    profile_id: int
    viewer_user_id: Optional[str] = None
    viewer_location: Optional[str] = None
    viewer_device: Optional[str] = None
    view_duration: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    viewed_at: datetime
