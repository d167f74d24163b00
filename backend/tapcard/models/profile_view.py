# backend/tapcard/models/profile_view.py
"""Profile view events used for analytics."""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.timezone_utils import utcnow
from ..database import Base
from .types import UTCDateTime


class ProfileView(Base):
    """A recorded visit to a profile's public page. Rows are never updated."""

    __tablename__ = "profile_views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    viewer_user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    viewer_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    viewer_device: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    view_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # seconds
    ip_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    viewed_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<ProfileView(id={self.id}, profile={self.profile_id}, at={self.viewed_at})>"
