# backend/tapcard/routes/analytics.py
"""
Analytics routes.

Endpoints:
    GET /stats                → Caller's connection and view counts
    GET /views/{profile_id}   → View log of a profile, most recent first
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..api.dependencies import get_analytics_service, get_current_user, get_profile_view_service
from ..api.request_context import parse_profile_id
from ..core.exceptions import DomainException, raise_503_if_pool_exhaustion
from ..models.user import User
from ..schemas.analytics import AnalyticsStatsResponse
from ..schemas.profile_view import ProfileViewResponse
from ..services.analytics_service import AnalyticsService
from ..services.profile_view_service import ProfileViewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.get("/stats", response_model=AnalyticsStatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsStatsResponse:
    """
    Dashboard statistics for the caller.

    Raises:
        HTTPException: 404 if the caller has no profile
    """
    try:
        stats = await asyncio.to_thread(analytics_service.stats, current_user.id)
        return AnalyticsStatsResponse.model_validate(stats)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error computing stats for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch stats"
        )


@router.get("/views/{profile_id}", response_model=List[ProfileViewResponse])
async def list_profile_views(
    profile_id: str,
    profile_view_service: ProfileViewService = Depends(get_profile_view_service),
) -> List[ProfileViewResponse]:
    """Raw view log of a profile."""
    try:
        resolved_id = parse_profile_id(profile_id)
        views = await asyncio.to_thread(profile_view_service.list_for, resolved_id)
        return [ProfileViewResponse.model_validate(view) for view in views]
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error listing views of profile {profile_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch views"
        )
