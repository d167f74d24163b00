# backend/tapcard/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each request gets services bound to its own database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.analytics_service import AnalyticsService
from ...services.connection_service import ConnectionService
from ...services.profile_service import ProfileService
from ...services.profile_view_service import ProfileViewService
from ...services.scan_service import ScanService
from ...database import get_db


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Get ProfileService bound to the request session."""
    return ProfileService(db)


def get_profile_view_service(db: Session = Depends(get_db)) -> ProfileViewService:
    """Get ProfileViewService bound to the request session."""
    return ProfileViewService(db)


def get_connection_service(db: Session = Depends(get_db)) -> ConnectionService:
    """Get ConnectionService bound to the request session."""
    return ConnectionService(db)


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """
    Get analytics service instance.

    Args:
        db: Database session

    Returns:
        AnalyticsService wired to profile, connection and view services
    """
    return AnalyticsService(
        db,
        profile_service=ProfileService(db),
        connection_service=ConnectionService(db),
        profile_view_service=ProfileViewService(db),
    )


def get_scan_service(db: Session = Depends(get_db)) -> ScanService:
    """Get ScanService bound to the request session."""
    return ScanService(db)
