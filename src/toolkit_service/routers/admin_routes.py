"""
Administrative routes for tools.

Every route here requires a bearer token carrying the `admin` role.
Admins see tools in every status and can patch, delete and bulk-process
them.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from ..config import settings
from ..crud.tools import ToolMutations, ToolQueries
from ..dependencies.app_deps import get_tool_mutations, get_tool_queries
from ..dependencies.user_deps import require_admin_user
from ..logging_config import logger
from ..schemas.common import (
    DataResponse,
    ErrorResponse,
    Message,
    PaginatedResponse,
    PaginationMeta,
)
from ..schemas.tool import (
    BulkIdsRequest,
    BulkResult,
    BulkStatusRequest,
    ToolFilter,
    ToolResponse,
    ToolStats,
    ToolUpdate,
)

router = APIRouter(
    prefix="/admin/tools",
    tags=["admin"],
    dependencies=[Depends(require_admin_user)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)


@router.get("/stats", response_model=DataResponse[ToolStats], summary="Tool statistics")
async def get_tool_stats(queries: ToolQueries = Depends(get_tool_queries)):
    """Counts by status, featured flag and distinct category."""
    return DataResponse[ToolStats](data=await queries.get_stats())


@router.get(
    "/",
    response_model=PaginatedResponse[ToolResponse],
    summary="List tools in every status",
)
async def admin_list_tools(
    page: int = Query(1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE),
    category: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    tool_status: Optional[str] = Query(None, alias="status"),
    queries: ToolQueries = Depends(get_tool_queries),
):
    filters = ToolFilter(
        page=page,
        limit=limit,
        category=category,
        status=tool_status,
        featured=featured,
        search=search,
    )
    result = await queries.list_tools(filters, include_all_statuses=True)

    return PaginatedResponse[ToolResponse](
        data=[ToolResponse.model_validate(tool) for tool in result.items],
        pagination=PaginationMeta.build(page=page, limit=limit, total=result.total),
    )


@router.get(
    "/by-user/{user_id}",
    response_model=List[ToolResponse],
    summary="Tools submitted by a user",
)
async def list_tools_by_user(
    user_id: UUID = Path(..., description="Creator user ID"),
    limit: int = Query(10, ge=1, le=100),
    queries: ToolQueries = Depends(get_tool_queries),
):
    """Tools created by one user, in any status, newest first."""
    return await queries.get_tools_by_user(user_id, limit=limit)


@router.get(
    "/by-status/{tool_status}",
    response_model=List[ToolResponse],
    summary="Every tool in one status",
)
async def list_tools_by_status(
    tool_status: str = Path(..., description="active, pending or inactive"),
    queries: ToolQueries = Depends(get_tool_queries),
):
    return await queries.get_tools_by_status(tool_status)


@router.patch(
    "/{tool_id}",
    response_model=DataResponse[ToolResponse],
    summary="Update a tool",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_tool(
    tool_update: ToolUpdate,
    tool_id: str = Path(..., description="Tool ID"),
    mutations: ToolMutations = Depends(get_tool_mutations),
):
    """Apply a partial update; only the fields sent are changed."""
    tool = await mutations.update_tool(tool_id, tool_update)
    return DataResponse[ToolResponse](
        message="Tool updated successfully",
        data=ToolResponse.model_validate(tool),
    )


@router.delete(
    "/{tool_id}",
    response_model=Message,
    summary="Delete a tool",
    responses={404: {"model": ErrorResponse}},
)
async def delete_tool(
    tool_id: str = Path(..., description="Tool ID"),
    mutations: ToolMutations = Depends(get_tool_mutations),
):
    await mutations.delete_tool(tool_id)
    return Message(message="Tool deleted successfully")


@router.post(
    "/bulk-delete",
    response_model=DataResponse[BulkResult],
    summary="Delete several tools",
)
async def bulk_delete_tools(
    request: BulkIdsRequest,
    mutations: ToolMutations = Depends(get_tool_mutations),
):
    """Each ID is processed independently; failures are counted, not raised."""
    result = await mutations.bulk_delete(request.ids)
    logger.info(f"Admin bulk delete of {result.total} tools")
    return DataResponse[BulkResult](
        message=f"{result.succeeded} deleted, {result.failed} failed",
        data=result,
    )


@router.post(
    "/bulk-status",
    response_model=DataResponse[BulkResult],
    summary="Change the status of several tools",
)
async def bulk_update_tool_status(
    request: BulkStatusRequest,
    mutations: ToolMutations = Depends(get_tool_mutations),
):
    result = await mutations.bulk_update_status(request.ids, request.status)
    return DataResponse[BulkResult](
        message=f"{result.succeeded} updated, {result.failed} failed",
        data=result,
    )
