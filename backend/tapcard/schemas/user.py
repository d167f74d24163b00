"""Pydantic schemas for users."""

from datetime import datetime
from typing import Optional

from .base import CamelModel


class UserResponse(CamelModel):
    """User record as returned by the API."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
