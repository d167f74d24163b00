"""
Share link helpers.

The profile URL is what gets written to NFC tags and encoded in QR codes;
ScanResolver parses the same shape back into a profile id.
"""

from typing import Optional
from urllib.parse import urlencode

from ..core.config import Settings, settings as default_settings


def build_profile_url(profile_id: int, settings: Optional[Settings] = None) -> str:
    """Public page URL of a profile, e.g. ``https://app.example/profile/42``."""
    cfg = settings or default_settings
    return f"{cfg.public_base_url}/profile/{profile_id}"


def build_qr_code_url(profile_url: str, settings: Optional[Settings] = None) -> str:
    """Image URL of a QR code encoding ``profile_url``."""
    cfg = settings or default_settings
    size = f"{cfg.qr_code_size}x{cfg.qr_code_size}"
    query = urlencode({"size": size, "format": "png", "data": profile_url})
    return f"{cfg.qr_code_service_url}?{query}"
