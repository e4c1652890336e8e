"""
Tool schemas for the Toolkit Service.

This module defines Pydantic schemas for API requests and responses
related to tools, tool statistics and bulk administration.

Request bodies are deliberately loose (every field optional, plain strings
for enumerations): the field rules live in `toolkit_service.validation` so
that a bad payload is reported as one list of violations instead of a
framework error per field.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ToolCreate(BaseModel):
    """Schema for creating a new tool."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Tool name")
    description: Optional[str] = Field(None, description="Tool description")
    description_vi: Optional[str] = Field(
        None, description="Localized (Vietnamese) description"
    )
    url: Optional[str] = Field(None, description="Absolute URL of the tool")
    category: Optional[str] = Field(None, description="One of the tool categories")
    status: Optional[str] = Field(
        None, description="active, pending or inactive (defaults to active)"
    )
    featured: Optional[bool] = Field(None, description="Promote in listings")
    image: Optional[str] = Field(None, description="Preview image URL")


class ToolUpdate(BaseModel):
    """Schema for patching an existing tool. Only the fields sent are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    description_vi: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    image: Optional[str] = None


class ToolResponse(BaseModel):
    """Schema for tool responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Tool unique identifier")
    title: str
    description: str
    description_vi: Optional[str] = None
    url: str
    category: str
    status: str
    featured: bool
    image: Optional[str] = None
    created_by: Optional[UUID] = Field(None, description="ID of the creating user")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class ToolFilter(BaseModel):
    """
    Listing parameters.

    Ranges are checked by the query layer, which raises InvalidParameter,
    so no constraints are declared here.
    """

    page: int = 1
    limit: int = 10
    category: Optional[str] = None
    status: Optional[str] = None  # None means active unless all statuses are requested
    featured: Optional[bool] = None
    search: Optional[str] = None


class ToolStats(BaseModel):
    """Aggregate counts over the whole tools table."""

    total: int = 0
    active: int = 0
    pending: int = 0
    inactive: int = 0
    featured: int = 0
    categories: int = 0


class BulkIdsRequest(BaseModel):
    """Schema for bulk operations addressed by tool IDs."""

    ids: List[str] = Field(..., description="Tool IDs to process")


class BulkStatusRequest(BulkIdsRequest):
    """Schema for bulk status changes."""

    status: str = Field(..., description="New status for every listed tool")


class BulkResult(BaseModel):
    """Outcome of a bulk operation; each ID is counted exactly once."""

    succeeded: int = 0
    failed: int = 0
    failed_ids: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
