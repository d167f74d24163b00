# backend/tapcard/auth.py
"""
Bearer token handling.

Users sign in with an external identity provider; the API only verifies the
HS256 access token it is handed and reads the identity claims from it.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from jwt import PyJWTError

from .core.config import settings
from .core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Claims copied onto the User row on every authenticated request
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify the signature and expiry of an access token and return its claims."""
    payload = jwt.decode(
        token,
        _secret_value(settings.secret_key),
        algorithms=[settings.algorithm],
        options={"verify_aud": False},
    )
    return cast(Dict[str, Any], payload)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Used by local tooling and tests; production tokens come from the
    identity provider with the same secret.

    Args:
        data: Claims to encode; ``sub`` is the user id
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode.update({"exp": expire})

    encoded_jwt = cast(
        str,
        jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm),
    )
    logger.debug(f"Created access token for user: {data.get('sub')}")
    return encoded_jwt


def _claims_from_token(token: str) -> Dict[str, Any]:
    payload = decode_access_token(token)
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise PyJWTError("Token payload missing 'sub' field")
    return payload


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """
    Dependency returning the verified claims of the caller's bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException(code="NOT_AUTHENTICATED").to_http_exception()

    try:
        return _claims_from_token(credentials.credentials)
    except PyJWTError as e:
        logger.warning(f"JWT validation error: {str(e)}")
        raise UnauthorizedException(code="INVALID_TOKEN").to_http_exception()


async def get_current_claims_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Dict[str, Any]]:
    """
    Like get_current_claims, but anonymous callers get None.

    An invalid token is treated as anonymous rather than rejected, so public
    pages keep working with a stale session.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _claims_from_token(credentials.credentials)
    except PyJWTError as e:
        logger.debug(f"Ignoring invalid optional token: {str(e)}")
        return None


def profile_claims(claims: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """The identity claims that are mirrored onto the User row."""
    result: Dict[str, Optional[str]] = {}
    for name in PROFILE_CLAIMS:
        value = claims.get(name)
        result[name] = value if isinstance(value, str) else None
    return result
