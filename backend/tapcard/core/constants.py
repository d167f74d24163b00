"""Application-wide constants for TapCard."""

from __future__ import annotations

BRAND_NAME = "TapCard"
API_VERSION = "1.0.0"

# Platforms a profile may link to; anything else is rejected on save
SOCIAL_PLATFORMS: frozenset[str] = frozenset(
    {"linkedin", "github", "twitter", "instagram", "whatsapp"}
)

# How a connection was made
SCAN_METHOD_NFC = "nfc"
SCAN_METHOD_QR = "qr"
SCAN_METHOD_LINK = "link"
SCAN_METHODS: frozenset[str] = frozenset({SCAN_METHOD_NFC, SCAN_METHOD_QR, SCAN_METHOD_LINK})

# Analytics windows
WEEK_WINDOW_DAYS = 7

# Text constraints
MAX_NAME_LENGTH = 255
MAX_BIO_LENGTH = 2000
MAX_SCAN_TOKEN_LENGTH = 2048

# Largest id an Integer primary key column can hold (PostgreSQL INTEGER)
MAX_DB_INTEGER = 2**31 - 1
