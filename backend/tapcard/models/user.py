# backend/tapcard/models/user.py
"""
User model for TapCard.

Users are created by the external identity provider; a row is upserted the
first time a bearer token for the user is seen and refreshed on later logins.
The id is the provider's opaque subject and never changes.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base
from .types import TimestampMixin

if TYPE_CHECKING:
    from .profile import Profile


class User(TimestampMixin, Base):
    """
    Authenticated identity.

    Attributes:
        id: Opaque subject id from the identity provider
        email: Unique email address (optional)
        first_name: Given name
        last_name: Family name
        profile_image_url: Avatar URL

    Relationships:
        profiles: Business card profiles owned by the user (one in practice)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    profiles: Mapped[List["Profile"]] = relationship("Profile", back_populates="user")

    @property
    def full_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
