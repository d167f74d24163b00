# backend/tapcard/services/scan_resolver.py
"""
Scan token resolution.

A token read from an NFC tag or decoded from a QR code takes one of three
shapes:

    https://host/profile/42   profile URL (current tags and all QR codes)
    42                        bare profile id
    a1b2-c3d4                 legacy NFC tag id, looked up in the profile store

URL and numeric tokens are resolved without touching storage; only legacy
tag ids need a lookup.
"""

from dataclasses import dataclass
import logging
import re
from typing import Literal, Optional, Tuple

from ..core.constants import MAX_DB_INTEGER
from ..core.exceptions import InvalidScanTokenException, ProfileNotFoundException
from ..models.profile import Profile
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

ScanSource = Literal["url", "numeric", "nfc_tag"]

_PROFILE_URL_PATTERN = re.compile(r"(?:^|/)profile/(\d+)")
_NUMERIC_PATTERN = re.compile(r"^\d+$")


@dataclass(frozen=True)
class ParsedToken:
    """A token classified by shape, before any storage lookup."""

    source: ScanSource
    profile_id: Optional[int] = None
    tag_id: Optional[str] = None


@dataclass(frozen=True)
class ScanResolution:
    """A token resolved to a profile id."""

    profile_id: int
    source: ScanSource


def _storable_id(digits: str) -> int:
    profile_id = int(digits)
    if profile_id > MAX_DB_INTEGER:
        raise ProfileNotFoundException()
    return profile_id


def parse_scan_token(token: Optional[str]) -> ParsedToken:
    """
    Classify a raw scan token.

    Raises:
        InvalidScanTokenException: If the token is empty
        ProfileNotFoundException: If the embedded id is beyond the id column range
    """
    cleaned = (token or "").strip()
    if not cleaned:
        raise InvalidScanTokenException("Scan token is empty")

    match = _PROFILE_URL_PATTERN.search(cleaned)
    if match:
        return ParsedToken(source="url", profile_id=_storable_id(match.group(1)))
    if _NUMERIC_PATTERN.match(cleaned):
        return ParsedToken(source="numeric", profile_id=_storable_id(cleaned))
    return ParsedToken(source="nfc_tag", tag_id=cleaned)


class ScanResolver:
    """Maps scan tokens to profile ids, using the profile store for legacy tags."""

    def __init__(self, profile_repository: ProfileRepository):
        self.profile_repository = profile_repository

    def resolve(self, token: Optional[str]) -> ScanResolution:
        """
        Resolve a token to a profile id.

        Raises:
            InvalidScanTokenException: If the token is empty
            ProfileNotFoundException: If a legacy tag id matches no profile
        """
        parsed = parse_scan_token(token)
        if parsed.profile_id is not None:
            resolution = ScanResolution(profile_id=parsed.profile_id, source=parsed.source)
        else:
            profile = self.profile_repository.get_by_nfc_tag(parsed.tag_id or "")
            if profile is None:
                logger.info("Scan token matched no NFC tag")
                raise ProfileNotFoundException()
            resolution = ScanResolution(profile_id=profile.id, source="nfc_tag")

        prometheus_metrics.inc_scan_resolution(resolution.source)
        return resolution

    def resolve_profile(self, token: Optional[str]) -> Tuple[ScanResolution, Profile]:
        """
        Resolve a token and load the profile it points to.

        Raises:
            InvalidScanTokenException: If the token is empty
            ProfileNotFoundException: If no profile exists for the token
        """
        resolution = self.resolve(token)
        profile = self.profile_repository.get_by_id(resolution.profile_id)
        if profile is None:
            raise ProfileNotFoundException()
        return resolution, profile
