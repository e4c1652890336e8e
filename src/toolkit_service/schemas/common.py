"""
Common schema definitions for the Toolkit Service.

This module defines shared Pydantic schemas used throughout the service,
including pagination and the response envelopes returned by the API.
"""

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

# Generic type for enveloped responses
T = TypeVar("T")


class Message(BaseModel):
    """Schema for simple message responses."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Schema for every error body the API returns."""

    success: bool = False
    error: str
    details: Optional[List[Any]] = None


class PaginationMeta(BaseModel):
    """Pagination state of a listing response."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., description="Current page number (1-indexed)")
    limit: int = Field(..., description="Number of items per page")
    total: int = Field(..., description="Total number of items across all pages")
    total_pages: int = Field(
        ..., alias="totalPages", description="Total number of pages"
    )

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Generic schema for paginated responses.

    Used by every endpoint that returns a page of items, so clients can rely
    on one envelope shape.
    """

    success: bool = True
    data: List[T]
    pagination: PaginationMeta


class DataResponse(BaseModel, Generic[T]):
    """Envelope for single-object responses."""

    success: bool = True
    message: Optional[str] = None
    data: T
