"""Pydantic schemas for analytics responses."""

from pydantic import Field

from .base import CamelModel


class ViewStatsResponse(CamelModel):
    """Profile view counts; windows are nested so total >= week >= today."""

    total_views: int = Field(..., ge=0)
    today_views: int = Field(..., ge=0)
    week_views: int = Field(..., ge=0)


class ConnectionStatsResponse(CamelModel):
    """Outgoing connection counts of a user."""

    total: int = Field(..., ge=0)
    this_week: int = Field(..., ge=0)
    favorites: int = Field(..., ge=0)


class AnalyticsStatsResponse(CamelModel):
    """Dashboard statistics for the caller."""

    connections: ConnectionStatsResponse
    views: ViewStatsResponse
