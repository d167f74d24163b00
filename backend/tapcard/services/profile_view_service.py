# backend/tapcard/services/profile_view_service.py
"""
Profile View Service for TapCard

Appends profile view events and computes the view counts shown on the
dashboard.
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings, settings as default_settings
from ..core.constants import WEEK_WINDOW_DAYS
from ..core.exceptions import ProfileNotFoundException
from ..core.timezone_utils import days_ago, ensure_utc, start_of_local_day, utcnow
from ..events import emit_profile_viewed
from ..models.profile_view import ProfileView
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from ..repositories.profile_view_repository import ProfileViewRepository
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewStats:
    """View counts of one profile. Windows are nested: total >= week >= today."""

    total_views: int
    today_views: int
    week_views: int


class ProfileViewService(BaseService):
    """Service for recording and counting profile views."""

    def __init__(
        self,
        db: Session,
        profile_view_repository: Optional[ProfileViewRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize profile view service with dependencies."""
        super().__init__(db)
        self.profile_view_repository = (
            profile_view_repository or RepositoryFactory.create_profile_view_repository(db)
        )
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )
        self.settings = settings or default_settings

    @BaseService.measure_operation("record_view")
    def record(
        self,
        profile_id: int,
        *,
        viewer_user_id: Optional[str] = None,
        viewer_location: Optional[str] = None,
        viewer_device: Optional[str] = None,
        view_duration: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> ProfileView:
        """
        Append a view of ``profile_id``.

        Every call inserts a row; repeated visits and owner visits are counted.

        Raises:
            ProfileNotFoundException: If verify_viewed_profile is on and the
                profile does not exist
        """
        if self.settings.verify_viewed_profile and not self.profile_repository.exists(
            id=profile_id
        ):
            raise ProfileNotFoundException()

        with self.transaction():
            view = self.profile_view_repository.create(
                profile_id=profile_id,
                viewer_user_id=viewer_user_id,
                viewer_location=viewer_location,
                viewer_device=viewer_device,
                view_duration=view_duration,
                ip_address=ip_address,
                user_agent=user_agent,
                viewed_at=utcnow(),
            )

        prometheus_metrics.inc_profile_view()
        emit_profile_viewed(
            view_id=view.id,
            profile_id=view.profile_id,
            viewer_user_id=view.viewer_user_id,
            viewed_at=view.viewed_at,
        )
        return view

    @BaseService.measure_operation("view_stats")
    def stats_for(self, profile_id: int, now: Optional[datetime] = None) -> ViewStats:
        """
        Count views of a profile.

        Today starts at midnight of the analytics timezone; the week is the
        trailing seven 24h periods ending at ``now``.
        """
        reference = ensure_utc(now) if now is not None else utcnow()
        today_start = start_of_local_day(self.settings.analytics_timezone, reference)
        week_start = days_ago(WEEK_WINDOW_DAYS, reference)

        return ViewStats(
            total_views=self.profile_view_repository.count_for_profile(profile_id),
            today_views=self.profile_view_repository.count_for_profile(
                profile_id, since=today_start
            ),
            week_views=self.profile_view_repository.count_for_profile(
                profile_id, since=week_start
            ),
        )

    def list_for(self, profile_id: int) -> List[ProfileView]:
        """All views of a profile, most recent first."""
        return self.profile_view_repository.list_for_profile(profile_id)
