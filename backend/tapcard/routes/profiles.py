# backend/tapcard/routes/profiles.py
"""
Profile routes.

All business logic delegated to ProfileService and ProfileViewService.

Endpoints:
    GET /                    → Caller's profile (null if none)
    POST /                   → Create or update the caller's profile
    PATCH /                  → Partially update the caller's profile
    GET /nfc/{tag_id}        → Public profile by legacy NFC tag id
    GET /{profile_id}        → Public profile by id; records a view
    POST /{profile_id}/view  → Record a view with visitor metadata
    GET /{profile_id}/share  → Profile URL and QR code image URL
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..api.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_profile_service,
    get_profile_view_service,
)
from ..api.request_body import parse_body
from ..api.request_context import client_ip, parse_profile_id, user_agent
from ..core.exceptions import DomainException, raise_503_if_pool_exhaustion
from ..models.user import User
from ..schemas.base import MessageResponse
from ..schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate, ShareLinksResponse
from ..schemas.profile_view import ProfileViewCreate
from ..services.profile_service import ProfileService
from ..services.profile_view_service import ProfileViewService
from ..services.share_links import build_profile_url, build_qr_code_url

logger = logging.getLogger(__name__)

# No prefix here, added when mounting in main.py
router = APIRouter(tags=["profiles"])


@router.get("", response_model=Optional[ProfileResponse])
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Optional[ProfileResponse]:
    """Get the caller's profile, or null if they have not created one yet."""
    try:
        profile = await asyncio.to_thread(profile_service.get_by_user, current_user.id)
        return ProfileResponse.model_validate(profile) if profile else None
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error fetching profile for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch profile"
        )


@router.post("", response_model=ProfileResponse)
async def save_my_profile(
    request: Request,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the caller's profile, or update it if one already exists.

    Raises:
        HTTPException: 409 if the NFC tag belongs to another profile
    """
    try:
        payload = await parse_body(request, ProfileCreate)
        profile = await asyncio.to_thread(
            profile_service.save_for_user,
            current_user.id,
            payload.model_dump(exclude_unset=True),
        )
        return ProfileResponse.model_validate(profile)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error saving profile for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save profile"
        )


@router.patch("", response_model=ProfileResponse)
async def update_my_profile(
    request: Request,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Merge the given fields into the caller's profile.

    Raises:
        HTTPException: 404 if the caller has no profile
    """
    try:
        payload = await parse_body(request, ProfileUpdate)
        profile = await asyncio.to_thread(
            profile_service.update,
            current_user.id,
            payload.model_dump(exclude_unset=True),
        )
        return ProfileResponse.model_validate(profile)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error updating profile for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile"
        )


# Registered before /{profile_id} so "nfc" is never read as an id
@router.get("/nfc/{tag_id}", response_model=ProfileResponse)
async def get_profile_by_nfc_tag(
    tag_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Public profile bound to a legacy NFC tag id."""
    try:
        profile = await asyncio.to_thread(profile_service.require_by_nfc_tag, tag_id)
        return ProfileResponse.model_validate(profile)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error fetching profile for NFC tag {tag_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch profile"
        )


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    request: Request,
    current_user: Optional[User] = Depends(get_current_user_optional),
    profile_service: ProfileService = Depends(get_profile_service),
    profile_view_service: ProfileViewService = Depends(get_profile_view_service),
) -> ProfileResponse:
    """
    Public profile page data. Every successful fetch records a view,
    attributed to the caller when they are signed in.
    """
    try:
        resolved_id = parse_profile_id(profile_id)
        profile = await asyncio.to_thread(profile_service.require_by_id, resolved_id)
        await asyncio.to_thread(
            profile_view_service.record,
            profile.id,
            viewer_user_id=current_user.id if current_user else None,
            ip_address=client_ip(request),
            user_agent=user_agent(request),
        )
        return ProfileResponse.model_validate(profile)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error fetching profile {profile_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch profile"
        )


@router.post("/{profile_id}/view", response_model=MessageResponse)
async def record_profile_view(
    profile_id: str,
    request: Request,
    current_user: Optional[User] = Depends(get_current_user_optional),
    profile_view_service: ProfileViewService = Depends(get_profile_view_service),
) -> MessageResponse:
    """Record a view sent by the profile page, with location and time on page."""
    try:
        resolved_id = parse_profile_id(profile_id)
        payload = await parse_body(request, ProfileViewCreate)
        await asyncio.to_thread(
            profile_view_service.record,
            resolved_id,
            viewer_user_id=current_user.id if current_user else None,
            viewer_location=payload.viewer_location,
            view_duration=payload.view_duration,
            ip_address=client_ip(request),
            user_agent=user_agent(request),
        )
        return MessageResponse(message="View recorded")
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error recording view of profile {profile_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to record view"
        )


@router.get("/{profile_id}/share", response_model=ShareLinksResponse)
async def get_share_links(
    profile_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
) -> ShareLinksResponse:
    """Links to write to an NFC tag or render as a QR code."""
    try:
        resolved_id = parse_profile_id(profile_id)
        profile = await asyncio.to_thread(profile_service.require_by_id, resolved_id)
        profile_url = build_profile_url(profile.id)
        return ShareLinksResponse(
            profile_id=profile.id,
            profile_url=profile_url,
            qr_code_url=build_qr_code_url(profile_url),
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error building share links for profile {profile_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build share links",
        )
