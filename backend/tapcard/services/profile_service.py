# backend/tapcard/services/profile_service.py
"""
Profile Service for TapCard

Business logic for a user's business card: creation, partial updates,
the create-or-update save used by the profile form, and public lookups by
id or NFC tag.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import (
    NfcTagConflictException,
    ProfileNotFoundException,
    ValidationException,
)
from ..models.profile import Profile
from ..repositories.factory import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from .base import BaseService
from .share_links import build_profile_url

logger = logging.getLogger(__name__)

# Columns a caller may set; id, user_id and timestamps are owned by the service
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "profession",
        "company",
        "bio",
        "phone",
        "website",
        "social_links",
        "is_public",
        "nfc_tag_id",
        "qr_code_data",
    }
)


class ProfileService(BaseService):
    """
    Service for managing business card profiles.

    One profile per user is enforced here by check-then-write, not by the
    database: two concurrent first saves can both create a row.
    """

    def __init__(self, db: Session, profile_repository: Optional[ProfileRepository] = None):
        """Initialize profile service with dependencies."""
        super().__init__(db)
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )

    def get_by_user(self, user_id: str) -> Optional[Profile]:
        """Return the caller's profile, or None if they have not created one."""
        return self.profile_repository.get_by_user(user_id)

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self.profile_repository.get_by_id(profile_id)

    def get_by_nfc_tag(self, tag_id: str) -> Optional[Profile]:
        return self.profile_repository.get_by_nfc_tag(tag_id)

    def require_by_id(self, profile_id: int) -> Profile:
        """
        Load a profile by id.

        Raises:
            ProfileNotFoundException: If no profile has this id
        """
        profile = self.get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundException()
        return profile

    def require_by_nfc_tag(self, tag_id: str) -> Profile:
        """
        Load a profile by NFC tag id.

        Raises:
            ProfileNotFoundException: If no profile holds this tag
        """
        profile = self.get_by_nfc_tag(tag_id)
        if profile is None:
            raise ProfileNotFoundException()
        return profile

    @BaseService.measure_operation("create_profile")
    def create(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        """
        Create a profile for ``user_id``.

        Args:
            user_id: Owner of the new profile
            fields: Profile columns; ``name`` is required

        Returns:
            The created profile, with ``qr_code_data`` defaulted to its public URL

        Raises:
            ValidationException: If the name is missing or blank
            NfcTagConflictException: If the NFC tag belongs to another profile
        """
        self.log_operation("create_profile", user_id=user_id)
        data = self._editable(fields)

        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationException("Profile name is required", code="PROFILE_NAME_REQUIRED")
        data["name"] = name

        tag_id = data.get("nfc_tag_id")
        if tag_id and self.profile_repository.nfc_tag_taken(tag_id):
            raise NfcTagConflictException(tag_id)

        with self.transaction():
            profile = self.profile_repository.create(user_id=user_id, **data)
            if not profile.qr_code_data:
                self.profile_repository.update_entity(
                    profile, qr_code_data=build_profile_url(profile.id)
                )

        self.logger.info(f"Created profile {profile.id} for user {user_id}")
        return profile

    @BaseService.measure_operation("update_profile")
    def update(self, user_id: str, partial: Dict[str, Any]) -> Profile:
        """
        Merge the given fields into the caller's profile.

        Raises:
            ProfileNotFoundException: If the user has no profile
            ValidationException: If the name is set to blank
            NfcTagConflictException: If the NFC tag belongs to another profile
        """
        self.log_operation("update_profile", user_id=user_id, fields=sorted(partial))
        data = self._editable(partial)

        if "name" in data:
            name = (data["name"] or "").strip()
            if not name:
                raise ValidationException(
                    "Profile name is required", code="PROFILE_NAME_REQUIRED"
                )
            data["name"] = name

        existing = self.profile_repository.get_by_user(user_id)
        if existing is None:
            raise ProfileNotFoundException()

        tag_id = data.get("nfc_tag_id")
        if tag_id and self.profile_repository.nfc_tag_taken(
            tag_id, exclude_profile_id=existing.id
        ):
            raise NfcTagConflictException(tag_id)

        with self.transaction():
            profile = self.profile_repository.update_for_user(user_id, **data)

        if profile is None:
            raise ProfileNotFoundException()
        return profile

    def save_for_user(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        """
        Update the caller's profile if it exists, otherwise create it.

        Not atomic: the existence check and the write are separate statements.
        """
        if self.profile_repository.get_by_user(user_id) is not None:
            return self.update(user_id, fields)
        return self.create(user_id, fields)

    @staticmethod
    def _editable(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
