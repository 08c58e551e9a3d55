"""
Blog API Backend: Shared Response Schemas
==========================================

What:  The uniform response envelope and the health check payload.
How:   Field names are snake_case in Python and camelCase on the wire
       (`statusCode`), via pydantic's alias generator.

Envelope shape (every /posts response, success or failure):
    {
        "statusCode": 404,
        "message": "No category found with the given id",
        "data": null
    }
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel, Generic[DataT]):
    """
    What:  Transient wrapper around every outward-facing result.
    Who:   Returned by the post routes and by the global exception handlers.
    """
    status_code: int = Field(description="HTTP status code, repeated in the body")
    message: str = Field(description="Human-readable outcome")
    data: Optional[DataT] = Field(default=None, description="Payload, if any")

    def to_response_content(self) -> dict:
        """JSON-ready dict with wire (camelCase) field names."""
        return self.model_dump(by_alias=True, mode="json")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
