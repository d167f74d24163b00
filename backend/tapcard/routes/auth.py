# backend/tapcard/routes/auth.py
"""
Auth routes.

Sign-in itself happens at the identity provider; this only reports who the
bearer token belongs to.
"""

import logging

from fastapi import APIRouter, Depends

from ..api.dependencies import get_current_user
from ..models.user import User
from ..schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/user", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)) -> UserResponse:
    """
    Get the current user's record.

    The record is created or refreshed from the token claims on every call.
    """
    return UserResponse.model_validate(current_user)
