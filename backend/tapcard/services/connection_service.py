# backend/tapcard/services/connection_service.py
"""
Connection Service for TapCard

Records "I met this person" edges created by scanning a card or pressing
connect, lists them for their owner and maintains the favorite flag.
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.constants import MAX_DB_INTEGER, SCAN_METHOD_LINK, SCAN_METHODS, WEEK_WINDOW_DAYS
from ..core.exceptions import NotFoundException, ProfileNotFoundException, ValidationException
from ..core.timezone_utils import days_ago, ensure_utc, utcnow
from ..events import emit_connection_created
from ..models.connection import Connection
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.connection_repository import ConnectionRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from ..repositories.user_repository import UserRepository
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionStats:
    """Outgoing connection counts of one user."""

    total: int
    this_week: int
    favorites: int


class ConnectionService(BaseService):
    """
    Service for managing connection edges.

    Edges are never deduplicated: scanning the same card twice records two
    connections.
    """

    def __init__(
        self,
        db: Session,
        connection_repository: Optional[ConnectionRepository] = None,
        user_repository: Optional[UserRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
    ):
        """Initialize connection service with dependencies."""
        super().__init__(db)
        self.connection_repository = (
            connection_repository or RepositoryFactory.create_connection_repository(db)
        )
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )

    @BaseService.measure_operation("create_connection")
    def create(
        self,
        from_user_id: str,
        to_user_id: str,
        to_profile_id: Optional[int] = None,
        scan_method: Optional[str] = SCAN_METHOD_LINK,
        notes: Optional[str] = None,
    ) -> Connection:
        """
        Record a connection from ``from_user_id`` to ``to_user_id``.

        Args:
            from_user_id: The caller (owner of the edge)
            to_user_id: The person whose card was scanned
            to_profile_id: The scanned profile, when known
            scan_method: One of nfc, qr, link
            notes: Free text from the owner

        Returns:
            The created connection

        Raises:
            ValidationException: If the users are the same or the scan method is unknown
            NotFoundException: If the target user does not exist
            ProfileNotFoundException: If the target profile does not exist
        """
        self.log_operation(
            "create_connection",
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            scan_method=scan_method,
        )

        if from_user_id == to_user_id:
            raise ValidationException("Cannot connect to yourself", code="SELF_CONNECTION")

        if scan_method is not None and scan_method not in SCAN_METHODS:
            raise ValidationException(
                f"Unsupported scan method: {scan_method}",
                code="INVALID_SCAN_METHOD",
                details={"allowed": sorted(SCAN_METHODS)},
            )

        if not self.user_repository.exists(id=to_user_id):
            raise NotFoundException("User not found", code="USER_NOT_FOUND")

        if to_profile_id is not None and (
            to_profile_id > MAX_DB_INTEGER or not self.profile_repository.exists(id=to_profile_id)
        ):
            raise ProfileNotFoundException()

        with self.transaction():
            connection = self.connection_repository.create(
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                to_profile_id=to_profile_id,
                scan_method=scan_method,
                notes=notes,
                connected_at=utcnow(),
            )

        prometheus_metrics.inc_connection_created(scan_method)
        emit_connection_created(
            connection_id=connection.id,
            from_user_id=connection.from_user_id,
            to_user_id=connection.to_user_id,
            to_profile_id=connection.to_profile_id,
            scan_method=connection.scan_method,
            connected_at=connection.connected_at,
        )
        return connection

    def list_for(self, user_id: str) -> List[Connection]:
        """Outgoing connections of ``user_id`` with target user and profile, newest first."""
        return self.connection_repository.list_for_user(user_id)

    @BaseService.measure_operation("toggle_favorite")
    def toggle_favorite(self, user_id: str, connection_id: int) -> Optional[Connection]:
        """
        Flip the favorite flag of a connection owned by ``user_id``.

        A missing or foreign connection is left alone and no error is raised,
        so callers cannot probe for other users' edges.

        Returns:
            The updated connection, or None when nothing changed
        """
        with self.transaction():
            connection = self.connection_repository.toggle_favorite(user_id, connection_id)

        if connection is None:
            self.logger.info(
                f"Favorite toggle ignored: connection {connection_id} not owned by {user_id}"
            )
        return connection

    @BaseService.measure_operation("connection_stats")
    def stats_for(self, user_id: str, now: Optional[datetime] = None) -> ConnectionStats:
        """Count the user's outgoing connections, overall and within the trailing week."""
        reference = ensure_utc(now) if now is not None else utcnow()
        return ConnectionStats(
            total=self.connection_repository.count_for_user(user_id),
            this_week=self.connection_repository.count_for_user(
                user_id, since=days_ago(WEEK_WINDOW_DAYS, reference)
            ),
            favorites=self.connection_repository.count_favorites(user_id),
        )
