# backend/tapcard/repositories/factory.py
"""
Repository Factory for TapCard

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .connection_repository import ConnectionRepository
    from .profile_repository import ProfileRepository
    from .profile_view_repository import ProfileViewRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation so services and route dependencies can
    swap implementations in tests.
    """

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        """Create repository for user identity rows."""
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_profile_repository(db: Session) -> "ProfileRepository":
        """Create repository for profile lookups."""
        from .profile_repository import ProfileRepository

        return ProfileRepository(db)

    @staticmethod
    def create_connection_repository(db: Session) -> "ConnectionRepository":
        """Create repository for connection edges."""
        from .connection_repository import ConnectionRepository

        return ConnectionRepository(db)

    @staticmethod
    def create_profile_view_repository(db: Session) -> "ProfileViewRepository":
        """Create repository for profile view events."""
        from .profile_view_repository import ProfileViewRepository

        return ProfileViewRepository(db)
