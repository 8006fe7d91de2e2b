"""
Common response models and utilities.

Success and error envelopes shared by every endpoint, plus the camelCase
base model used by API payloads.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base for API payloads serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response wrapper."""

    success: bool = True
    message: str = "Success"
    data: T
    timestamp: datetime = Field(default_factory=utc_now)


class ErrorBody(CamelModel):
    message: str = Field(description="Error message")
    status_code: int = Field(description="HTTP status code")


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: ErrorBody
    timestamp: datetime = Field(default_factory=utc_now)
