# backend/tapcard/repositories/connection_repository.py
"""
Connection Repository for TapCard

Handles all database operations for connection edges: creation, the
per-user listing joined with the target user and profile, the favorite
flag and the counts behind connection analytics.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.connection import Connection
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConnectionRepository(BaseRepository[Connection]):
    """
    Repository for managing connection edges.

    Edges are only ever read from the owner's side (``from_user_id``).
    """

    def __init__(self, db: Session):
        """Initialize with Connection model."""
        super().__init__(db, Connection)

    def list_for_user(self, user_id: str) -> List[Connection]:
        """
        Get all outgoing connections of a user, most recent first.

        The target user and target profile are eagerly loaded with outer
        joins; ``to_profile`` is None when the edge has no profile.

        Args:
            user_id: Owner of the edges

        Returns:
            List of Connection objects ordered by connected_at descending
        """
        try:
            connections = (
                self.db.query(Connection)
                .options(joinedload(Connection.to_user), joinedload(Connection.to_profile))
                .filter(Connection.from_user_id == user_id)
                .order_by(Connection.connected_at.desc(), Connection.id.desc())
                .all()
            )
            self.logger.debug(f"Retrieved {len(connections)} connections for user {user_id}")
            return connections
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing connections for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list connections: {str(e)}")

    def get_owned(self, user_id: str, connection_id: int) -> Optional[Connection]:
        """Return the connection only if ``user_id`` is its owner."""
        try:
            return (
                self.db.query(Connection)
                .filter(
                    and_(
                        Connection.id == connection_id,
                        Connection.from_user_id == user_id,
                    )
                )
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading connection {connection_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve connection: {str(e)}")

    def toggle_favorite(self, user_id: str, connection_id: int) -> Optional[Connection]:
        """
        Flip ``is_favorite`` on an owned connection.

        Read-then-write without a lock: concurrent toggles are last-write-wins.

        Returns:
            The updated connection, or None when it is missing or not owned
        """
        connection = self.get_owned(user_id, connection_id)
        if connection is None:
            return None
        return self.update_entity(connection, is_favorite=not connection.is_favorite)

    def count_for_user(self, user_id: str, since: Optional[datetime] = None) -> int:
        """Count outgoing connections, optionally only those made at or after ``since``."""
        query = self._build_query().filter(Connection.from_user_id == user_id)
        if since is not None:
            query = query.filter(Connection.connected_at >= since)
        return self._execute_count(query)

    def count_favorites(self, user_id: str) -> int:
        """Count outgoing connections flagged as favorite."""
        query = self._build_query().filter(
            Connection.from_user_id == user_id,
            Connection.is_favorite.is_(True),
        )
        return self._execute_count(query)
