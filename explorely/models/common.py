"""
Common response models and utilities.

Shared base model, generic wrappers and embedded summaries.

Dependencies: pydantic
System role: Common API response structures
"""

import uuid
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    """Plain acknowledgement."""

    message: str


class SuccessResponse(APIModel):
    """Acknowledgement with a success flag."""

    success: bool = True
    message: str | None = None


class ErrorResponse(APIModel):
    """Error body returned for every failed request."""

    message: str = Field(description="Error message")
    errors: list | None = Field(default=None, description="Field-level validation errors")


class PaginatedResponse(APIModel, Generic[T]):
    """Generic page wrapper."""

    items: list[T]
    total: int
    current_page: int
    total_pages: int
    has_more: bool = False


class UserSummary(APIModel):
    """Author/sender shown next to content."""

    id: uuid.UUID
    username: str
    name: str | None = None
    avatar: str | None = None


class CommunitySummary(APIModel):
    """Community shown next to content."""

    id: uuid.UUID
    name: str
    avatar: str | None = None
