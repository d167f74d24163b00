# backend/tapcard/models/connection.py
"""Connection model: a directed "I met/scanned this person" edge."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.timezone_utils import utcnow
from ..database import Base
from .types import UTCDateTime

if TYPE_CHECKING:
    from .profile import Profile
    from .user import User


class Connection(Base):
    """
    Edge from the scanning user to the scanned user.

    There is no uniqueness on (from_user_id, to_user_id): every scan or
    connect action inserts a new row.
    """

    __tablename__ = "connections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    from_user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # Outgoing edges are listed and counted per user
    )
    to_user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    to_profile_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    scan_method: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    connected_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False, index=True
    )

    from_user: Mapped["User"] = relationship("User", foreign_keys=[from_user_id])
    to_user: Mapped["User"] = relationship("User", foreign_keys=[to_user_id])
    to_profile: Mapped[Optional["Profile"]] = relationship("Profile", foreign_keys=[to_profile_id])

    def __repr__(self) -> str:
        return (
            f"<Connection(id={self.id}, from={self.from_user_id}, to={self.to_user_id}, "
            f"favorite={self.is_favorite})>"
        )
