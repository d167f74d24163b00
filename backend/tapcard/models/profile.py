# backend/tapcard/models/profile.py
"""Business card profile model."""

from typing import TYPE_CHECKING, Dict, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base
from .types import JSONType, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Profile(TimestampMixin, Base):
    """
    Public business card of a user.

    One profile per user is kept by the service layer (check-then-write),
    not by a database constraint. ``nfc_tag_id`` is a unique lookup key for
    legacy tags that carry an opaque id instead of the profile URL.
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    profession: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    # platform -> handle or URL, keys from SOCIAL_PLATFORMS
    social_links: Mapped[Optional[Dict[str, str]]] = mapped_column(JSONType, nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    nfc_tag_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    qr_code_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="profiles")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user={self.user_id}, name={self.name!r})>"
