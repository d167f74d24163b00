# backend/tapcard/api/request_context.py
"""Helpers that read identifiers and visitor metadata off the request."""

from typing import Optional

from fastapi import Request

from ..core.constants import MAX_DB_INTEGER
from ..core.exceptions import ProfileNotFoundException


def parse_optional_id(raw: str) -> Optional[int]:
    """
    Parse a numeric path segment.

    Returns None when the segment is not digits or exceeds the id column range;
    no row can have such an id.
    """
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value <= MAX_DB_INTEGER else None


def parse_profile_id(raw: str) -> int:
    """
    Parse a profile id path segment.

    Raises:
        ProfileNotFoundException: If the segment is not a storable profile id
    """
    profile_id = parse_optional_id(raw)
    if profile_id is None:
        raise ProfileNotFoundException()
    return profile_id


def client_ip(request: Request) -> Optional[str]:
    """Caller address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else None


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
