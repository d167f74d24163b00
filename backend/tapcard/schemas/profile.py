"""
Pydantic schemas for business card profiles.

Defines request and response models for the profile endpoints.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import Field, field_validator

from ..core.constants import MAX_BIO_LENGTH, MAX_NAME_LENGTH, SOCIAL_PLATFORMS
from .base import CamelModel, CamelRequestModel


def _clean_social_links(value: Optional[Dict[str, Optional[str]]]) -> Optional[Dict[str, str]]:
    if value is None:
        return None
    unknown = sorted(set(value) - SOCIAL_PLATFORMS)
    if unknown:
        raise ValueError(f"Unsupported social platforms: {', '.join(unknown)}")
    # Empty handles mean "not set"
    return {key: handle.strip() for key, handle in value.items() if handle and handle.strip()}


class ProfileFields(CamelRequestModel):
    """Optional card fields shared by create and update."""

    profession: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = Field(None, max_length=MAX_BIO_LENGTH)
    phone: Optional[str] = Field(None, max_length=64)
    website: Optional[str] = Field(None, max_length=1024)
    social_links: Optional[Dict[str, Optional[str]]] = None
    is_public: Optional[bool] = None
    nfc_tag_id: Optional[str] = Field(None, max_length=255)
    qr_code_data: Optional[str] = None

    @field_validator("social_links")
    @classmethod
    def _validate_social_links(
        cls, value: Optional[Dict[str, Optional[str]]]
    ) -> Optional[Dict[str, str]]:
        return _clean_social_links(value)

    @field_validator("nfc_tag_id")
    @classmethod
    def _blank_tag_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ProfileCreate(ProfileFields):
    """Body of POST /api/profile. The owner comes from the caller's identity."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class ProfileUpdate(ProfileFields):
    """Body of PATCH /api/profile; only the fields present are merged."""

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class ProfileResponse(CamelModel):
    """Profile as returned by the API."""

    id: int
    user_id: str
    name: str
    profession: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
    is_public: bool = True
    nfc_tag_id: Optional[str] = None
    qr_code_data: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShareLinksResponse(CamelModel):
    """Links used to share a profile by NFC tag, QR code or plain link."""

    profile_id: int
    profile_url: str
    qr_code_url: str
