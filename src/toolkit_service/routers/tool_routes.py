"""
Public API routes for tools.

This module defines the FastAPI routes of the public tool directory:
filtered listings, lookups and tool submission. Taxonomy errors raised by
the layers are turned into responses by the handler registered in main.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from ..config import settings
from ..crud.tools import ToolMutations, ToolQueries
from ..dependencies.app_deps import get_tool_mutations, get_tool_queries
from ..dependencies.user_deps import get_optional_user_id
from ..schemas.common import DataResponse, ErrorResponse, PaginatedResponse, PaginationMeta
from ..schemas.tool import ToolCreate, ToolFilter, ToolResponse

router = APIRouter(
    prefix="/tools",
    tags=["tools"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get(
    "/",
    response_model=PaginatedResponse[ToolResponse],
    summary="List tools",
    description="List tools with filtering and pagination (active tools by default)",
)
async def list_tools(
    page: int = Query(1, description="Page number (>= 1)"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, description="Page size (1-100)"),
    category: Optional[str] = Query(None, description="Filter by category"),
    featured: Optional[bool] = Query(None, description="Filter by featured flag"),
    search: Optional[str] = Query(None, description="Search title and description"),
    tool_status: Optional[str] = Query(
        None, alias="status", description="Filter by status (defaults to active)"
    ),
    queries: ToolQueries = Depends(get_tool_queries),
):
    """
    List tools with filtering and pagination.

    Every supplied filter must hold for each returned tool.
    """
    filters = ToolFilter(
        page=page,
        limit=limit,
        category=category,
        status=tool_status,
        featured=featured,
        search=search,
    )
    result = await queries.list_tools(filters)

    return PaginatedResponse[ToolResponse](
        data=[ToolResponse.model_validate(tool) for tool in result.items],
        pagination=PaginationMeta.build(page=page, limit=limit, total=result.total),
    )


@router.post(
    "/",
    response_model=DataResponse[ToolResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new tool",
    description="Submit a new tool to the directory",
    responses={409: {"model": ErrorResponse}},
)
async def create_tool(
    tool: ToolCreate,
    mutations: ToolMutations = Depends(get_tool_mutations),
    user_id: Optional[UUID] = Depends(get_optional_user_id),
):
    """
    Create a new tool.

    When the request carries a valid bearer token the caller is recorded
    as the tool's creator.
    """
    created = await mutations.create_tool(tool, created_by=user_id)
    return DataResponse[ToolResponse](
        message="Tool created successfully",
        data=ToolResponse.model_validate(created),
    )


@router.get(
    "/featured",
    response_model=List[ToolResponse],
    summary="Featured tools",
)
async def list_featured_tools(
    limit: int = Query(6, ge=1, le=100),
    queries: ToolQueries = Depends(get_tool_queries),
):
    return await queries.get_featured_tools(limit=limit)


@router.get(
    "/latest",
    response_model=List[ToolResponse],
    summary="Latest tools",
)
async def list_latest_tools(
    limit: int = Query(10, ge=1, le=100),
    queries: ToolQueries = Depends(get_tool_queries),
):
    return await queries.get_latest_tools(limit=limit)


@router.get(
    "/categories/{category}",
    response_model=List[ToolResponse],
    summary="Tools in a category",
)
async def list_tools_by_category(
    category: str = Path(..., description="Category slug"),
    limit: int = Query(10, ge=1, le=100),
    queries: ToolQueries = Depends(get_tool_queries),
):
    return await queries.get_tools_by_category(category, limit=limit)


@router.get(
    "/{tool_id}",
    response_model=ToolResponse,
    summary="Get tool",
    description="Get a specific tool by ID",
    responses={404: {"model": ErrorResponse}},
)
async def get_tool(
    tool_id: UUID = Path(..., description="Tool ID"),
    queries: ToolQueries = Depends(get_tool_queries),
):
    return await queries.get_tool_by_id(tool_id)
