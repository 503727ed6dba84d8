"""
Common Schemas

BaseSchema gives every API model the same JSON shape: snake_case in
Python, camelCase on the wire, readable straight from ORM rows.

    class ImageResponse(BaseSchema):
        cloudinary_id: Optional[str]   # "cloudinaryId" in JSON

Handlers keep FastAPI's ``response_model_by_alias=True`` default.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorBody(BaseModel):
    code: str = Field(examples=["NOT_FOUND"])
    message: str = Field(examples=["Category with id '...' not found"])
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Envelope produced by the global exception handlers (OpenAPI docs only)."""

    error: ErrorBody


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
