# backend/tapcard/api/dependencies/auth.py
"""
Authentication dependencies.

The bearer token's claims are turned into a User row: created on first
sight, refreshed when the provider reports new profile claims. The upsert
runs in a worker thread so the event loop is never blocked on the database.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import get_current_claims, get_current_claims_optional, profile_claims
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from ...database import get_db

logger = logging.getLogger(__name__)


def _upsert_user(db: Session, claims: Dict[str, Any]) -> User:
    user_repository = RepositoryFactory.create_user_repository(db)
    with user_repository.transaction():
        user = user_repository.upsert(claims["sub"], **profile_claims(claims))
    return user


async def get_current_user(
    claims: Dict[str, Any] = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    Raises:
        HTTPException: 401 if the request carries no valid bearer token
    """
    return await asyncio.to_thread(_upsert_user, db, claims)


async def get_current_user_optional(
    claims: Optional[Dict[str, Any]] = Depends(get_current_claims_optional),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Get the current user if a valid token was sent, otherwise None.

    Used by public endpoints that attribute views or connections to a
    signed-in visitor.
    """
    if claims is None:
        return None
    return await asyncio.to_thread(_upsert_user, db, claims)
