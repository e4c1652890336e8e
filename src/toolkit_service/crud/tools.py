"""
Query and mutation layers for tools.

This module provides the database operations for listing, reading,
creating, updating and deleting tools. Both layers are built from an
`async_sessionmaker`; every operation opens its own session, so calls that
fan out (stats, bulk operations) never share one.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..errors import (
    STORE_ERRORS,
    FieldViolation,
    InvalidParameter,
    NotFound,
    ValidationError,
    classify_store_error,
)
from ..logging_config import logger
from ..models.base import utc_now
from ..models.tool import TOOL_CATEGORY_VALUES, TOOL_STATUS_VALUES, Tool, ToolStatus
from ..schemas.tool import BulkResult, ToolFilter, ToolStats
from ..validation import normalize_tool_data, validate_tool_data

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 100

ToolId = Union[UUID, str]
ToolInput = Union[BaseModel, Mapping[str, Any]]

# Newest first; id breaks ties between rows created in the same instant
NEWEST_FIRST = (Tool.created_at.desc(), Tool.id.desc())


@dataclass
class ToolPage:
    """One page of tools plus the number of rows matching the same filter."""

    items: List[Tool] = field(default_factory=list)
    total: int = 0


def _coerce_id(tool_id: ToolId) -> UUID:
    """Parse an identifier; anything that is not a UUID cannot match a row."""
    if isinstance(tool_id, UUID):
        return tool_id
    try:
        return UUID(str(tool_id))
    except ValueError:
        raise NotFound(f"Tool with ID {tool_id} not found") from None


def _as_dict(data: ToolInput) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def build_tool_conditions(
    category: Optional[str] = None,
    status: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
) -> list:
    """
    Build the AND-combined WHERE clauses for a tool listing.

    Omitted arguments impose no constraint. `search` is matched
    case-insensitively as a substring of the title or the description.
    """
    conditions = []
    if category:
        conditions.append(Tool.category == category)
    if status:
        conditions.append(Tool.status == status)
    if featured is not None:
        conditions.append(Tool.featured == featured)
    if search and search.strip():
        term = search.strip()
        conditions.append(
            or_(
                Tool.title.icontains(term, autoescape=True),
                Tool.description.icontains(term, autoescape=True),
            )
        )
    return conditions


class ToolQueries:
    """Read side: filtered listings, lookups and aggregate statistics."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _snapshot_session(self) -> AsyncIterator[AsyncSession]:
        """
        Session whose statements all read from one snapshot.

        PostgreSQL needs REPEATABLE READ for that; SQLite read transactions
        already are a single snapshot.
        """
        async with self._session_factory() as session:
            if session.bind is not None and session.bind.dialect.name == "postgresql":
                await session.connection(
                    execution_options={"isolation_level": "REPEATABLE READ"}
                )
            yield session

    async def list_tools(
        self,
        filters: Optional[ToolFilter] = None,
        include_all_statuses: bool = False,
    ) -> ToolPage:
        """
        List tools with pagination and optional filtering.

        Args:
            filters: Page, limit and filter predicates
            include_all_statuses: When True a missing status filter matches
                every status; otherwise it defaults to active

        Returns:
            ToolPage with the requested window and the total match count

        Raises:
            InvalidParameter: If page/limit are out of range or a filter value
                is not a known category/status
            StorageUnavailable: If the store cannot be reached
        """
        filters = filters or ToolFilter()

        if filters.page < 1:
            raise InvalidParameter("Invalid pagination parameters: page must be >= 1")
        if not MIN_PAGE_LIMIT <= filters.limit <= MAX_PAGE_LIMIT:
            raise InvalidParameter(
                f"Invalid pagination parameters: limit must be between "
                f"{MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}"
            )

        status = filters.status
        if status is None and not include_all_statuses:
            status = ToolStatus.ACTIVE.value
        if status is not None and status not in TOOL_STATUS_VALUES:
            raise InvalidParameter(f"Invalid status filter: {status}")
        if filters.category and filters.category not in TOOL_CATEGORY_VALUES:
            raise InvalidParameter(f"Invalid category filter: {filters.category}")

        conditions = build_tool_conditions(
            category=filters.category,
            status=status,
            featured=filters.featured,
            search=filters.search,
        )

        count_query = select(func.count()).select_from(Tool)
        query = select(Tool)
        if conditions:
            count_query = count_query.where(*conditions)
            query = query.where(*conditions)

        offset = (filters.page - 1) * filters.limit
        query = query.order_by(*NEWEST_FIRST).offset(offset).limit(filters.limit)

        try:
            async with self._snapshot_session() as session:
                total = (await session.execute(count_query)).scalar_one()
                items = list((await session.execute(query)).scalars().all())
        except STORE_ERRORS as e:
            raise classify_store_error(e, "list tools") from e

        return ToolPage(items=items, total=total)

    async def get_tool_by_id(self, tool_id: ToolId) -> Tool:
        """
        Get a tool by ID.

        Raises:
            NotFound: If no tool has this ID
        """
        tool_uuid = _coerce_id(tool_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Tool).where(Tool.id == tool_uuid))
                tool = result.scalar_one_or_none()
        except STORE_ERRORS as e:
            raise classify_store_error(e, "fetch tool by ID") from e

        if tool is None:
            raise NotFound(f"Tool with ID {tool_id} not found")
        return tool

    async def _count(self, *conditions) -> int:
        query = select(func.count()).select_from(Tool)
        if conditions:
            query = query.where(*conditions)
        try:
            async with self._session_factory() as session:
                return (await session.execute(query)).scalar_one()
        except STORE_ERRORS as e:
            raise classify_store_error(e, "count tools") from e

    async def _count_categories(self) -> int:
        query = select(func.count(func.distinct(Tool.category)))
        try:
            async with self._session_factory() as session:
                return (await session.execute(query)).scalar_one()
        except STORE_ERRORS as e:
            raise classify_store_error(e, "count tool categories") from e

    async def get_stats(self) -> ToolStats:
        """
        Aggregate counts by status, featured flag and distinct category.

        The counts run concurrently, each on its own session. If any of them
        fails, its error is raised once every count has settled and no partial
        stats are returned.
        """
        counts = await asyncio.gather(
            self._count(),
            self._count(Tool.status == ToolStatus.ACTIVE.value),
            self._count(Tool.status == ToolStatus.PENDING.value),
            self._count(Tool.status == ToolStatus.INACTIVE.value),
            self._count(Tool.featured.is_(True)),
            self._count_categories(),
            return_exceptions=True,
        )
        for count in counts:
            if isinstance(count, BaseException):
                raise count

        total, active, pending, inactive, featured, categories = counts
        return ToolStats(
            total=total,
            active=active,
            pending=pending,
            inactive=inactive,
            featured=featured,
            categories=categories,
        )

    async def _fetch(self, operation: str, *conditions, limit: Optional[int] = None) -> List[Tool]:
        query = select(Tool).where(*conditions).order_by(*NEWEST_FIRST)
        if limit is not None:
            query = query.limit(limit)
        try:
            async with self._session_factory() as session:
                return list((await session.execute(query)).scalars().all())
        except STORE_ERRORS as e:
            raise classify_store_error(e, operation) from e

    async def get_featured_tools(self, limit: int = 6) -> List[Tool]:
        """Active featured tools, newest first."""
        return await self._fetch(
            "fetch featured tools",
            Tool.featured.is_(True),
            Tool.status == ToolStatus.ACTIVE.value,
            limit=limit,
        )

    async def get_latest_tools(self, limit: int = 10) -> List[Tool]:
        """Most recently created active tools."""
        return await self._fetch(
            "fetch latest tools", Tool.status == ToolStatus.ACTIVE.value, limit=limit
        )

    async def get_tools_by_category(self, category: str, limit: int = 10) -> List[Tool]:
        """Active tools in one category."""
        if category not in TOOL_CATEGORY_VALUES:
            raise InvalidParameter(f"Invalid category filter: {category}")
        return await self._fetch(
            "fetch tools by category",
            Tool.category == category,
            Tool.status == ToolStatus.ACTIVE.value,
            limit=limit,
        )

    async def get_tools_by_user(self, user_id: UUID, limit: int = 10) -> List[Tool]:
        """Tools created by one user, in any status."""
        return await self._fetch(
            "fetch tools by user", Tool.created_by == user_id, limit=limit
        )

    async def get_tools_by_status(self, status: str) -> List[Tool]:
        """Every tool in one status."""
        if status not in TOOL_STATUS_VALUES:
            raise InvalidParameter(f"Invalid status filter: {status}")
        return await self._fetch("fetch tools by status", Tool.status == status)


class ToolMutations:
    """Write side: validated create, partial update, delete and bulk operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_tool(self, data: ToolInput, created_by: Optional[UUID] = None) -> Tool:
        """
        Create a new tool.

        Args:
            data: Tool fields (mapping or ToolCreate)
            created_by: Optional ID of the creating user

        Returns:
            The persisted Tool with its generated ID and timestamps

        Raises:
            ValidationError: If any field rule is violated (nothing is written)
            DuplicateKey: If a tool with the same URL already exists
            ForeignKeyViolation: If created_by references an unknown user
        """
        payload = _as_dict(data)
        violations = validate_tool_data(payload, partial=False)
        if violations:
            raise ValidationError(violations)

        values = normalize_tool_data(payload)
        if values.get("status") is None:
            values["status"] = ToolStatus.ACTIVE.value
        if values.get("featured") is None:
            values["featured"] = False

        now = utc_now()
        tool = Tool(**values, created_by=created_by, created_at=now, updated_at=now)

        try:
            async with self._session_factory() as session:
                session.add(tool)
                await session.commit()
                await session.refresh(tool)
        except STORE_ERRORS as e:
            raise classify_store_error(e, "create tool") from e

        logger.info(f"Created tool: {tool.title} (ID: {tool.id})")
        return tool

    async def update_tool(self, tool_id: ToolId, patch: ToolInput) -> Tool:
        """
        Apply a partial update to a tool.

        Only the fields present in `patch` are validated and written;
        updated_at is re-stamped in the same statement.

        Raises:
            ValidationError: If the patch is empty or violates a field rule
            NotFound: If no tool has this ID
        """
        payload = _as_dict(patch)
        values = normalize_tool_data(payload)
        if not values:
            raise ValidationError(
                [FieldViolation("patch", "required", "No update data provided")]
            )

        violations = validate_tool_data(payload, partial=True)
        if violations:
            raise ValidationError(violations)

        tool_uuid = _coerce_id(tool_id)
        values["updated_at"] = utc_now()
        stmt = (
            update(Tool)
            .where(Tool.id == tool_uuid)
            .values(**values)
            .returning(Tool)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self._session_factory() as session:
                tool = (await session.execute(stmt)).scalar_one_or_none()
                if tool is None:
                    raise NotFound(f"Tool with ID {tool_id} not found")
                await session.commit()
                await session.refresh(tool)
        except STORE_ERRORS as e:
            raise classify_store_error(e, "update tool") from e

        logger.info(f"Updated tool: {tool.title} (ID: {tool.id}) fields={sorted(values)}")
        return tool

    async def delete_tool(self, tool_id: ToolId) -> None:
        """
        Delete a tool.

        Raises:
            NotFound: If no row was removed
        """
        tool_uuid = _coerce_id(tool_id)
        stmt = delete(Tool).where(Tool.id == tool_uuid).returning(Tool.id)

        try:
            async with self._session_factory() as session:
                deleted = (await session.execute(stmt)).scalars().all()
                if len(deleted) != 1:
                    raise NotFound(f"Tool with ID {tool_id} not found")
                await session.commit()
        except STORE_ERRORS as e:
            raise classify_store_error(e, "delete tool") from e

        logger.info(f"Deleted tool: {tool_uuid}")

    async def bulk_delete(self, ids: Sequence[ToolId]) -> BulkResult:
        """
        Delete every listed tool independently.

        Failures are counted, never raised; one failing ID does not stop the
        others and nothing is retried.
        """
        results = await asyncio.gather(
            *(self.delete_tool(tool_id) for tool_id in ids), return_exceptions=True
        )
        return self._summarize("delete", ids, results)

    async def bulk_update_status(self, ids: Sequence[ToolId], status: str) -> BulkResult:
        """
        Set the status of every listed tool independently.

        An invalid `status` fails validation for each ID, so it is reported
        as failed counts like any other per-item error.
        """
        results = await asyncio.gather(
            *(self.update_tool(tool_id, {"status": status}) for tool_id in ids),
            return_exceptions=True,
        )
        return self._summarize("status update", ids, results)

    @staticmethod
    def _summarize(operation: str, ids: Sequence[ToolId], results: Sequence[Any]) -> BulkResult:
        summary = BulkResult()
        for tool_id, result in zip(ids, results):
            if isinstance(result, BaseException):
                summary.failed += 1
                summary.failed_ids.append(str(tool_id))
                logger.warning(
                    f"Bulk {operation} failed for tool {tool_id}: "
                    f"{type(result).__name__}: {result}"
                )
            else:
                summary.succeeded += 1

        logger.info(
            f"Bulk {operation}: {summary.succeeded} succeeded, {summary.failed} failed"
        )
        return summary
