"""Pydantic request/response schemas (the API contract)."""

from blogapi.schemas.common import Envelope, HealthResponse
from blogapi.schemas.post import PostCreate, PostRead, PostUpdate

__all__ = ["Envelope", "HealthResponse", "PostCreate", "PostRead", "PostUpdate"]
