"""Service layer for TapCard."""

from .analytics_service import AnalyticsService, AnalyticsStats
from .base import BaseService
from .connection_service import ConnectionService, ConnectionStats
from .profile_service import ProfileService
from .profile_view_service import ProfileViewService, ViewStats
from .scan_resolver import ScanResolution, ScanResolver, parse_scan_token
from .scan_service import ScanOutcome, ScanService
from .share_links import build_profile_url, build_qr_code_url

__all__ = [
    "AnalyticsService",
    "AnalyticsStats",
    "BaseService",
    "ConnectionService",
    "ConnectionStats",
    "ProfileService",
    "ProfileViewService",
    "ScanOutcome",
    "ScanResolution",
    "ScanResolver",
    "ScanService",
    "ViewStats",
    "build_profile_url",
    "build_qr_code_url",
    "parse_scan_token",
]
