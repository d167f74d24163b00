# backend/tapcard/routes/connections.py
"""
Connection routes.

All business logic delegated to ConnectionService.

Endpoints:
    GET /                        → Caller's connections with target user and profile
    POST /                       → Record a connection from the caller
    PATCH /{connection_id}/favorite → Toggle the favorite flag
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..api.dependencies import get_connection_service, get_current_user
from ..api.request_body import parse_body
from ..api.request_context import parse_optional_id
from ..core.exceptions import DomainException, raise_503_if_pool_exhaustion
from ..models.user import User
from ..schemas.connection import (
    ConnectionCreate,
    ConnectionResponse,
    ConnectionWithDetails,
    FavoriteToggleResponse,
)
from ..services.connection_service import ConnectionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["connections"])


@router.get("", response_model=List[ConnectionWithDetails])
async def list_connections(
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> List[ConnectionWithDetails]:
    """Get the caller's connections, most recent first."""
    try:
        connections = await asyncio.to_thread(connection_service.list_for, current_user.id)
        return [ConnectionWithDetails.model_validate(connection) for connection in connections]
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error listing connections for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch connections",
        )


@router.post("", response_model=ConnectionResponse)
async def create_connection(
    request: Request,
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> ConnectionResponse:
    """
    Record that the caller met the owner of a card.

    Raises:
        HTTPException: 404 if the target user or profile does not exist
    """
    try:
        payload = await parse_body(request, ConnectionCreate)
        connection = await asyncio.to_thread(
            connection_service.create,
            from_user_id=current_user.id,
            to_user_id=payload.to_user_id,
            to_profile_id=payload.to_profile_id,
            scan_method=payload.scan_method,
            notes=payload.notes,
        )
        return ConnectionResponse.model_validate(connection)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error creating connection for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create connection",
        )


@router.patch("/{connection_id}/favorite", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    connection_id: str,
    current_user: User = Depends(get_current_user),
    connection_service: ConnectionService = Depends(get_connection_service),
) -> FavoriteToggleResponse:
    """
    Toggle the favorite flag of one of the caller's connections.

    The response is the same whether or not a connection was changed.
    """
    try:
        resolved_id = parse_optional_id(connection_id)
        if resolved_id is not None:
            await asyncio.to_thread(
                connection_service.toggle_favorite, current_user.id, resolved_id
            )
        return FavoriteToggleResponse(success=True)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise_503_if_pool_exhaustion(e)
        logger.error(f"Error toggling favorite {connection_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update favorite",
        )
