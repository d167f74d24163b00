# backend/tapcard/core/exceptions.py
"""
Domain-specific exceptions for TapCard.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: Optional[Dict[str, str]] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the message and code."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
            headers=self.headers,
        )


class ValidationException(DomainException):
    """
    Raised when input or business validation fails.

    Surfaces as 500 unless settings.validation_errors_as_bad_request is on;
    clients of the original API rely on the 500.
    """

    def to_http_exception(self) -> HTTPException:
        from .config import settings

        status_code = (
            status.HTTP_400_BAD_REQUEST
            if settings.validation_errors_as_bad_request
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return HTTPException(
            status_code=status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Unauthorized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ServiceException(DomainException):
    """Raised when a service operation fails."""


# Specific business exceptions


class ProfileNotFoundException(NotFoundException):
    """Raised when a profile lookup (by id, owner or NFC tag) yields no record."""

    def __init__(self, message: str = "Profile not found", **kwargs: Any) -> None:
        super().__init__(message, code="PROFILE_NOT_FOUND", **kwargs)


class InvalidScanTokenException(ValidationException):
    """Raised when a scanned token cannot be interpreted at all."""

    def __init__(self, message: str = "Invalid scan token", **kwargs: Any) -> None:
        super().__init__(message, code="INVALID_SCAN_TOKEN", **kwargs)


class NfcTagConflictException(ConflictException):
    """Raised when an NFC tag id is already bound to another profile."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            message="NFC tag is already assigned to another profile",
            code="NFC_TAG_CONFLICT",
            details={"nfc_tag_id": tag_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


def is_db_pool_exhaustion(exc: Exception) -> bool:
    """Check if an exception indicates DB connection pool exhaustion."""
    error_str = str(exc).lower()
    return "queuepool" in error_str or (
        "timeout" in error_str and ("connection" in error_str or "pool" in error_str)
    )


def raise_503_if_pool_exhaustion(exc: Exception) -> None:
    """
    Convert DB pool exhaustion errors to HTTP 503 (Service Unavailable).

    Raises:
        HTTPException: 503 if pool exhaustion detected
        Does not raise if not pool exhaustion (caller should re-raise original)
    """
    if is_db_pool_exhaustion(exc):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily overloaded. Please retry.",
            headers={"Retry-After": "2"},
        )
