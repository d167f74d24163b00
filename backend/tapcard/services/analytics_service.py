# backend/tapcard/services/analytics_service.py
"""
Analytics Service for TapCard

Combines connection and view counts into the dashboard statistics. Counts
are recomputed on every call; nothing is cached or persisted.
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ProfileNotFoundException
from ..core.timezone_utils import utcnow
from .base import BaseService
from .connection_service import ConnectionService, ConnectionStats
from .profile_service import ProfileService
from .profile_view_service import ProfileViewService, ViewStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsStats:
    connections: ConnectionStats
    views: ViewStats


class AnalyticsService(BaseService):
    """Read-only aggregation over the connection and view services."""

    def __init__(
        self,
        db: Session,
        profile_service: Optional[ProfileService] = None,
        connection_service: Optional[ConnectionService] = None,
        profile_view_service: Optional[ProfileViewService] = None,
    ):
        super().__init__(db)
        self.profile_service = profile_service or ProfileService(db)
        self.connection_service = connection_service or ConnectionService(db)
        self.profile_view_service = profile_view_service or ProfileViewService(db)

    @BaseService.measure_operation("dashboard_stats")
    def stats(self, user_id: str, now: Optional[datetime] = None) -> AnalyticsStats:
        """
        Dashboard statistics for ``user_id``.

        Both groups use the same reference instant so their weekly windows agree.

        Raises:
            ProfileNotFoundException: If the user has no profile
        """
        profile = self.profile_service.get_by_user(user_id)
        if profile is None:
            raise ProfileNotFoundException()

        reference = now or utcnow()
        return AnalyticsStats(
            connections=self.connection_service.stats_for(user_id, now=reference),
            views=self.profile_view_service.stats_for(profile.id, now=reference),
        )
