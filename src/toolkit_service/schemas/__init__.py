"""
Pydantic schemas for the Toolkit Service API.
"""

from .common import DataResponse, ErrorResponse, Message, PaginatedResponse, PaginationMeta
from .docs import DocFile, DocsIndex
from .user import UserTokenData
from .tool import (
    BulkIdsRequest,
    BulkResult,
    BulkStatusRequest,
    ToolCreate,
    ToolFilter,
    ToolResponse,
    ToolStats,
    ToolUpdate,
)
