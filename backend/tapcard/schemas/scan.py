"""Pydantic schemas for scan resolution."""

from typing import Literal, Optional

from pydantic import Field

from ..core.constants import MAX_SCAN_TOKEN_LENGTH
from .base import CamelModel, CamelRequestModel
from .connection import ScanMethod
from .profile import ProfileResponse


class ScanRequest(CamelRequestModel):
    """A raw token read from an NFC tag or decoded from a QR code."""

    token: str = Field(..., max_length=MAX_SCAN_TOKEN_LENGTH)
    scan_method: ScanMethod = "qr"
    viewer_location: Optional[str] = Field(None, max_length=255)


class ScanResponse(CamelModel):
    """Outcome of a scan: the resolved profile and what was recorded."""

    source: Literal["url", "numeric", "nfc_tag"]
    profile: ProfileResponse
    view_id: Optional[int] = None
    connection_id: Optional[int] = None
