# backend/tapcard/errors.py
"""
Exception handlers producing the API's error body.

Every error response is ``{"message": str, "code": str}``, plus ``details``
when the raising code attached any. Headers set on the exception (Allow on
405, Retry-After on 503, WWW-Authenticate on 401) are passed through.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.exceptions import DomainException

logger = logging.getLogger(__name__)


def _code_from_status(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        500: "INTERNAL_ERROR",
        503: "SERVICE_UNAVAILABLE",
    }
    return mapping.get(status_code, "ERROR")


def _parse_detail(detail: Any) -> Tuple[Optional[str], Optional[str], Optional[Any]]:
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        message = detail.get("message") or detail.get("detail")
        detail_text = message if isinstance(message, str) else None
        details = detail.get("details") or None
        return detail_text, code, details
    if isinstance(detail, str):
        return detail, None, None
    if detail is None:
        return None, None, None
    return str(detail), None, None


def error_body(
    status_code: int,
    message: Optional[str] = None,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Build the JSON error body for ``status_code``."""
    body: Dict[str, Any] = {
        "message": message or _code_from_status(status_code).replace("_", " ").capitalize(),
        "code": code or _code_from_status(status_code),
    }
    if details:
        body["details"] = jsonable_encoder(details)
    return body


def _validation_status() -> int:
    return 400 if settings.validation_errors_as_bad_request else 500


def _http_exception_response(exc: StarletteHTTPException) -> JSONResponse:
    message, code, details = _parse_detail(exc.detail)
    return JSONResponse(
        error_body(exc.status_code, message, code, details),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _http_exception_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _http_exception_response(exc)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        return _http_exception_response(exc.to_http_exception())

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        status_code = _validation_status()
        return JSONResponse(
            error_body(
                status_code,
                "Invalid request",
                "VALIDATION_ERROR",
                {"errors": jsonable_encoder(exc.errors())},
            ),
            status_code=status_code,
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        status_code = _validation_status()
        return JSONResponse(
            error_body(
                status_code,
                "Invalid request",
                "VALIDATION_ERROR",
                {"errors": exc.errors(include_url=False, include_context=False)},
            ),
            status_code=status_code,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            error_body(500, "Internal server error", "INTERNAL_ERROR"), status_code=500
        )
