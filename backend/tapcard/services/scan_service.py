# backend/tapcard/services/scan_service.py
"""
Scan Service for TapCard

The scan workflow behind POST /api/scan: resolve the token, record a view
of the profile and, when a signed-in visitor scans somebody else's card,
record a connection to its owner.
"""

from dataclasses import dataclass
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.constants import SCAN_METHOD_QR
from ..models.profile import Profile
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .connection_service import ConnectionService
from .profile_view_service import ProfileViewService
from .scan_resolver import ScanResolver, ScanSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    source: ScanSource
    profile: Profile
    view_id: Optional[int] = None
    connection_id: Optional[int] = None


class ScanService(BaseService):
    """Orchestrates resolver, view recorder and connection recorder for one scan."""

    def __init__(
        self,
        db: Session,
        resolver: Optional[ScanResolver] = None,
        profile_view_service: Optional[ProfileViewService] = None,
        connection_service: Optional[ConnectionService] = None,
    ):
        super().__init__(db)
        self.resolver = resolver or ScanResolver(RepositoryFactory.create_profile_repository(db))
        self.profile_view_service = profile_view_service or ProfileViewService(db)
        self.connection_service = connection_service or ConnectionService(db)

    @BaseService.measure_operation("scan")
    def scan(
        self,
        token: str,
        *,
        scan_method: str = SCAN_METHOD_QR,
        viewer_user_id: Optional[str] = None,
        viewer_location: Optional[str] = None,
        viewer_device: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> ScanOutcome:
        """
        Resolve ``token`` and record the visit.

        The connection is written before the view and each write commits on its
        own, so a rejected connection leaves no view behind.

        Raises:
            InvalidScanTokenException: If the token is empty
            ProfileNotFoundException: If the token points to no profile
        """
        resolution, profile = self.resolver.resolve_profile(token)
        self.log_operation(
            "scan", profile_id=profile.id, source=resolution.source, scan_method=scan_method
        )

        connection_id = None
        if viewer_user_id is not None and viewer_user_id != profile.user_id:
            connection = self.connection_service.create(
                from_user_id=viewer_user_id,
                to_user_id=profile.user_id,
                to_profile_id=profile.id,
                scan_method=scan_method,
            )
            connection_id = connection.id

        view = self.profile_view_service.record(
            profile.id,
            viewer_user_id=viewer_user_id,
            viewer_location=viewer_location,
            viewer_device=viewer_device,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return ScanOutcome(
            source=resolution.source,
            profile=profile,
            view_id=view.id,
            connection_id=connection_id,
        )
