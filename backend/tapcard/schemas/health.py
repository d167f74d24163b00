"""Pydantic schemas for health checks."""

from .base import CamelModel


class HealthResponse(CamelModel):
    status: str
    service: str
    version: str
    environment: str
