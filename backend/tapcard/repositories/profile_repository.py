# backend/tapcard/repositories/profile_repository.py
"""
Profile Repository for TapCard

Lookups of business card profiles by id, owning user and NFC tag id.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..core.timezone_utils import utcnow
from ..models.profile import Profile
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for Profile rows.

    A user is expected to own at most one profile; when legacy data holds
    more, the oldest one wins.
    """

    def __init__(self, db: Session):
        """Initialize with Profile model."""
        super().__init__(db, Profile)

    def get_by_user(self, user_id: str) -> Optional[Profile]:
        """Return the profile owned by ``user_id``, if any."""
        try:
            return (
                self.db.query(Profile)
                .filter(Profile.user_id == user_id)
                .order_by(Profile.id.asc())
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting profile for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve profile: {str(e)}")

    def get_by_nfc_tag(self, tag_id: str) -> Optional[Profile]:
        """Return the profile bound to an NFC tag id, if any."""
        return self.find_one_by(nfc_tag_id=tag_id)

    def nfc_tag_taken(self, tag_id: str, exclude_profile_id: Optional[int] = None) -> bool:
        """
        Check whether another profile already holds ``tag_id``.

        Args:
            tag_id: NFC tag id to check
            exclude_profile_id: Profile allowed to keep the tag (the one being updated)
        """
        try:
            query = self.db.query(Profile.id).filter(Profile.nfc_tag_id == tag_id)
            if exclude_profile_id is not None:
                query = query.filter(Profile.id != exclude_profile_id)
            return query.first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking NFC tag {tag_id}: {str(e)}")
            raise RepositoryException(f"Failed to check NFC tag: {str(e)}")

    def update_for_user(self, user_id: str, **fields: Any) -> Optional[Profile]:
        """
        Merge ``fields`` into the user's profile and refresh ``updated_at``.

        Returns:
            The updated profile, or None when the user has no profile
        """
        profile = self.get_by_user(user_id)
        if profile is None:
            return None
        fields["updated_at"] = utcnow()
        return self.update_entity(profile, **fields)
