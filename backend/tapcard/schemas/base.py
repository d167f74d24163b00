"""
Base schemas shared by the TapCard API.

The public JSON contract uses camelCase keys; Python code works with
snake_case attributes. Input accepts either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response/base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelRequestModel(CamelModel):
    """Request DTO base; unknown keys are dropped rather than rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
