# backend/tapcard/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz

from .constants import BRAND_NAME


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)

_DEFAULT_SECRET_KEY = SecretStr("tapcard-dev-secret-change-me")


class Settings(BaseSettings):
    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment name",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # Database
    database_url: str = Field(
        default="sqlite:///./tapcard.db",
        description="SQLAlchemy URL of the relational store",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to the log")

    # Auth tokens (issued by the external identity provider, HS256 shared secret)
    secret_key: SecretStr = Field(
        default=_DEFAULT_SECRET_KEY,
        description="Secret key used to verify bearer tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # 12 hours

    # Sharing
    public_base_url: str = Field(
        default="http://localhost:5173",
        description="Origin of the public profile pages written to NFC tags and QR codes",
    )
    qr_code_service_url: str = Field(
        default="https://api.qrserver.com/v1/create-qr-code/",
        description="Image service rendering QR codes for a profile URL",
    )
    qr_code_size: int = Field(default=400, ge=64, le=2000)

    # Analytics
    analytics_timezone: str = Field(
        default="UTC",
        description="Timezone whose calendar day bounds the 'today' view count",
    )

    # Behaviour switches
    verify_viewed_profile: bool = Field(
        default=False,
        description="Reject view recording for profile ids with no record",
    )
    validation_errors_as_bad_request: bool = Field(
        default=False,
        description="Map validation failures to 400 instead of 500",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("analytics_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown analytics timezone: {value}")
        return value

    @field_validator("public_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def app_name(self) -> str:
        return f"{BRAND_NAME} API"

    def get_database_url(self) -> str:
        """Get the database URL, refusing to hand a non-test database to pytest."""
        url = self.database_url
        if is_running_tests() and self.environment == "production":
            raise RuntimeError("Refusing to use a production database while running tests")
        return url


settings = Settings()
