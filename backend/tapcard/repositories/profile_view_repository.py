# backend/tapcard/repositories/profile_view_repository.py
"""
Profile View Repository for TapCard

Append-only access to profile view events plus the windowed counts used by
view analytics.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.profile_view import ProfileView
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProfileViewRepository(BaseRepository[ProfileView]):
    """Repository for ProfileView rows. There are no update or delete helpers."""

    def __init__(self, db: Session):
        """Initialize with ProfileView model."""
        super().__init__(db, ProfileView)

    def list_for_profile(self, profile_id: int) -> List[ProfileView]:
        """All views of a profile, most recent first."""
        query = (
            self._build_query()
            .filter(ProfileView.profile_id == profile_id)
            .order_by(ProfileView.viewed_at.desc(), ProfileView.id.desc())
        )
        return self._execute_query(query)

    def count_for_profile(self, profile_id: int, since: Optional[datetime] = None) -> int:
        """
        Count views of a profile.

        Args:
            profile_id: Viewed profile
            since: When given, only views with viewed_at >= since are counted

        Returns:
            Number of matching views
        """
        query = self._build_query().filter(ProfileView.profile_id == profile_id)
        if since is not None:
            query = query.filter(ProfileView.viewed_at >= since)
        return self._execute_count(query)
