# backend/tapcard/repositories/user_repository.py
"""
User Repository for TapCard

Data access for identity rows created from authentication claims.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.timezone_utils import utcnow
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User rows keyed by the provider's subject id."""

    def __init__(self, db: Session):
        """Initialize with User model."""
        super().__init__(db, User)

    def upsert(
        self,
        user_id: str,
        *,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        profile_image_url: Optional[str] = None,
    ) -> User:
        """
        Insert the user or refresh the claim fields of an existing row.

        Claims that are absent (None) leave the stored value untouched.

        Args:
            user_id: Subject id from the identity provider
            email: Email claim
            first_name: Given name claim
            last_name: Family name claim
            profile_image_url: Avatar claim

        Returns:
            The stored User
        """
        fields = {
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "profile_image_url": profile_image_url,
        }
        provided = {key: value for key, value in fields.items() if value is not None}

        existing = self.get_by_id(user_id)
        if existing is None:
            self.logger.info(f"Creating user {user_id} on first authentication")
            return self.create(id=user_id, **provided)

        changed = {key: value for key, value in provided.items() if getattr(existing, key) != value}
        if not changed:
            return existing
        changed["updated_at"] = utcnow()
        return self.update_entity(existing, **changed)
