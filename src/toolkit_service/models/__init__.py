"""
SQLAlchemy models for the Toolkit Service.

Import all models here to make them available when importing from the models package.
"""

from toolkit_service.models.base import Base, TimestampMixin, UUIDMixin
from toolkit_service.models.tool import Tool, ToolCategory, ToolStatus
from toolkit_service.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Tool",
    "ToolCategory",
    "ToolStatus",
    "User",
]
