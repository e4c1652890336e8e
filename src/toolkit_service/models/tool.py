# src/toolkit_service/models/tool.py
"""
Tool models for the Toolkit Service.

This module defines the SQLAlchemy model for directory tools together with
the category and status enumerations every stored row must belong to.
"""

from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from toolkit_service.models.base import Base, TimestampMixin, UUIDMixin


class ToolStatus(str, PyEnum):
    """Lifecycle state of a tool record."""

    ACTIVE = "active"  # Visible in public listings
    PENDING = "pending"  # Awaiting approval
    INACTIVE = "inactive"  # Hidden


class ToolCategory(str, PyEnum):
    """Fixed set of categories a tool is filed under."""

    DEVELOPER_TOOLS = "developer-tools"
    DESIGN_TOOLS = "design-tools"
    IMAGE_MEDIA_TOOLS = "image-media-tools"
    SEO_ANALYTICS_TOOLS = "seo-analytics-tools"
    PRODUCTIVITY_UTILITIES = "productivity-utilities"
    LEARNING_REFERENCE = "learning-reference"


TOOL_CATEGORY_VALUES = tuple(c.value for c in ToolCategory)
TOOL_STATUS_VALUES = tuple(s.value for s in ToolStatus)


class Tool(Base, UUIDMixin, TimestampMixin):
    """
    Model representing a single directory entry.

    Category and status are stored as plain strings; membership in the
    enumerations is enforced by the validation layer before any write.
    """

    __tablename__ = "tools"
    __table_args__ = (
        Index("ix_tools_status_created_at", "status", "created_at"),
    )

    # Basic information
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    description_vi = Column(Text, nullable=True)  # Localized description
    url = Column(String(500), nullable=False, unique=True)

    # Discoverability and organization
    category = Column(String(100), nullable=False, index=True)
    status = Column(
        String(20), nullable=False, default=ToolStatus.ACTIVE.value, index=True
    )
    featured = Column(Boolean, nullable=False, default=False, index=True)
    image = Column(String(500), nullable=True)

    # Optional reference to the identity that created the tool
    created_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )

    # Relationships
    creator = relationship("User", back_populates="tools")

    def __repr__(self) -> str:
        return f"<Tool {self.title!r} ({self.category}, {self.status})>"
