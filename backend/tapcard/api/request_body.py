# backend/tapcard/api/request_body.py
"""
JSON body parsing for route handlers.

Bodies are parsed inside the handler instead of by FastAPI's request
validation so that a malformed body surfaces as a ValidationException and
follows the same status mapping as business validation errors.
"""

from typing import Any, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from ..core.exceptions import ValidationException

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a JSON object; an empty body is ``{}``.

    Raises:
        ValidationException: If the body is not valid JSON or not an object
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationException("Request body is not valid JSON", code="INVALID_JSON")
    if not isinstance(payload, dict):
        raise ValidationException("Request body must be a JSON object", code="INVALID_JSON")
    return payload


async def parse_body(request: Request, schema: Type[ModelT]) -> ModelT:
    """
    Validate the request body against ``schema``.

    Raises:
        ValidationException: If the body is malformed or fails validation
    """
    payload = await read_json_object(request)
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationException(
            "Invalid request body",
            code="VALIDATION_ERROR",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        )
