# backend/tapcard/repositories/__init__.py
"""
Repository Pattern Implementation for TapCard

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- RepositoryFactory: Factory for creating repository instances
- UserRepository, ProfileRepository, ConnectionRepository, ProfileViewRepository

Usage:
    from tapcard.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_profile_repository(db)
    profile = repository.get_by_user(user_id)
"""

from .base_repository import BaseRepository
from .connection_repository import ConnectionRepository
from .factory import RepositoryFactory
from .profile_repository import ProfileRepository
from .profile_view_repository import ProfileViewRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ConnectionRepository",
    "ProfileRepository",
    "ProfileViewRepository",
    "RepositoryFactory",
    "UserRepository",
]
