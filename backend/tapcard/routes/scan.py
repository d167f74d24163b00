# backend/tapcard/routes/scan.py
"""
Scan route.

POST /api/scan takes the raw token read from an NFC tag or decoded from a
QR code and returns the profile it points to.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..api.dependencies import get_current_user_optional, get_scan_service
from ..api.request_body import parse_body
from ..api.request_context import client_ip, user_agent
from ..core.exceptions import DomainException, raise_503_if_pool_exhaustion
from ..models.user import User
from ..schemas.profile import ProfileResponse
from ..schemas.scan import ScanRequest, ScanResponse
from ..services.scan_service import ScanService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scan"])


@router.post("", response_model=ScanResponse)
async def scan_card(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user_optional),
    scan_service: ScanService = Depends(get_scan_service),
) -> ScanResponse:
    """
    Resolve a scanned token.

    A view is recorded for every scan. When the caller is signed in and the
    card is not their own, a connection to the card's owner is recorded too.
    """
    try:
        payload = await parse_body(request, ScanRequest)
        outcome = await asyncio.to_thread(
            scan_service.scan,
            payload.token,
            scan_method=payload.scan_method,
            viewer_user_id=current_user.id if current_user else None,
            viewer_location=payload.viewer_location,
            ip_address=client_ip(request),
            user_agent=user_agent(request),
        )
        return ScanResponse(
            source=outcome.source,
            profile=ProfileResponse.model_validate(outcome.profile),
            view_id=outcome.view_id,
            connection_id=outcome.connection_id,
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error resolving scan: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to resolve scan"
        )
