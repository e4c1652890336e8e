"""
Unit tests for the tool mutation layer.

Tests validated creation, partial updates, deletion and the bulk
operations, including how store failures are classified.
"""

import asyncio
import uuid

import pytest

from toolkit_service.errors import (
    DuplicateKey,
    ForeignKeyViolation,
    NotFound,
    ValidationError,
)
from toolkit_service.schemas.tool import ToolCreate, ToolUpdate

from tests.fixtures.tools import create_tools, tool_payload


@pytest.mark.asyncio
async def test_create_tool_applies_defaults(mutations, queries):
    tool = await mutations.create_tool(
        {
            "title": "VS Code",
            "description": "Editor",
            "url": "https://code.visualstudio.com",
            "category": "developer-tools",
        }
    )

    assert tool.id is not None
    assert tool.status == "active"
    assert tool.featured is False
    assert tool.created_by is None
    assert tool.created_at == tool.updated_at

    stored = await queries.get_tool_by_id(tool.id)
    assert stored.title == "VS Code"
    assert stored.url == "https://code.visualstudio.com"


@pytest.mark.asyncio
async def test_create_tool_accepts_schema_input(mutations):
    tool = await mutations.create_tool(
        ToolCreate(**tool_payload(title="  Trimmed  ", status="pending", featured=True))
    )

    assert tool.title == "Trimmed"
    assert tool.status == "pending"
    assert tool.featured is True


@pytest.mark.asyncio
async def test_create_tool_records_creator(mutations, test_user):
    tool = await mutations.create_tool(tool_payload(), created_by=test_user.id)

    assert tool.created_by == test_user.id


@pytest.mark.asyncio
async def test_create_tool_with_invalid_url_writes_nothing(mutations, queries):
    with pytest.raises(ValidationError) as excinfo:
        await mutations.create_tool(tool_payload(url="not-a-url"))

    assert "Invalid URL format" in excinfo.value.message
    assert excinfo.value.details == [
        {"field": "url", "rule": "invalid_url", "message": "Invalid URL format"}
    ]
    assert (await queries.get_stats()).total == 0


@pytest.mark.asyncio
async def test_create_tool_missing_url(mutations):
    payload = tool_payload()
    del payload["url"]

    with pytest.raises(ValidationError) as excinfo:
        await mutations.create_tool(payload)

    assert "URL is required" in excinfo.value.message


@pytest.mark.asyncio
async def test_create_tool_duplicate_url(mutations, queries):
    await mutations.create_tool(tool_payload(url="https://dup.example.com"))

    with pytest.raises(DuplicateKey):
        await mutations.create_tool(tool_payload(url="https://dup.example.com"))

    assert (await queries.get_stats()).total == 1


@pytest.mark.asyncio
async def test_create_tool_unknown_creator(mutations):
    with pytest.raises(ForeignKeyViolation):
        await mutations.create_tool(tool_payload(), created_by=uuid.uuid4())


@pytest.mark.asyncio
async def test_update_tool_changes_only_patched_fields(mutations):
    created = await mutations.create_tool(tool_payload(title="Old"))
    await asyncio.sleep(0.01)

    updated = await mutations.update_tool(created.id, {"title": "New"})

    assert updated.id == created.id
    assert updated.title == "New"
    assert updated.description == created.description
    assert updated.url == created.url
    assert updated.status == created.status
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


@pytest.mark.asyncio
async def test_update_tool_with_schema_ignores_unset_fields(mutations):
    created = await mutations.create_tool(tool_payload(featured=True))

    updated = await mutations.update_tool(created.id, ToolUpdate(status="inactive"))

    assert updated.status == "inactive"
    assert updated.featured is True


@pytest.mark.asyncio
async def test_update_tool_rejects_empty_patch(mutations):
    created = await mutations.create_tool(tool_payload())

    with pytest.raises(ValidationError) as excinfo:
        await mutations.update_tool(created.id, {})

    assert "No update data provided" in excinfo.value.message


@pytest.mark.asyncio
async def test_update_tool_rejects_invalid_fields(mutations):
    created = await mutations.create_tool(tool_payload())

    with pytest.raises(ValidationError):
        await mutations.update_tool(created.id, {"category": "spreadsheets"})


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_id", [uuid.uuid4(), "id-missing"])
async def test_update_tool_not_found(mutations, tool_id):
    with pytest.raises(NotFound):
        await mutations.update_tool(tool_id, {"title": "New"})


@pytest.mark.asyncio
async def test_update_tool_duplicate_url(mutations):
    first = await mutations.create_tool(tool_payload())
    second = await mutations.create_tool(tool_payload())

    with pytest.raises(DuplicateKey):
        await mutations.update_tool(second.id, {"url": first.url})


@pytest.mark.asyncio
async def test_delete_tool_twice(mutations, queries):
    created = await mutations.create_tool(tool_payload())

    await mutations.delete_tool(created.id)

    with pytest.raises(NotFound):
        await queries.get_tool_by_id(created.id)
    with pytest.raises(NotFound):
        await mutations.delete_tool(created.id)


@pytest.mark.asyncio
async def test_bulk_delete_counts_each_id_once(mutations, queries):
    (tool,) = await create_tools(mutations, 1)

    result = await mutations.bulk_delete([str(tool.id), "id-missing"])

    assert result.succeeded == 1
    assert result.failed == 1
    assert result.failed_ids == ["id-missing"]
    assert (await queries.get_stats()).total == 0


@pytest.mark.asyncio
async def test_bulk_delete_empty_list(mutations):
    result = await mutations.bulk_delete([])

    assert result.total == 0


@pytest.mark.asyncio
async def test_bulk_update_status(mutations, queries):
    tools = await create_tools(mutations, 3)
    missing = uuid.uuid4()

    result = await mutations.bulk_update_status(
        [t.id for t in tools] + [missing], "pending"
    )

    assert result.succeeded == 3
    assert result.failed_ids == [str(missing)]
    stats = await queries.get_stats()
    assert stats.pending == 3
    assert stats.active == 0


@pytest.mark.asyncio
async def test_bulk_update_status_counts_invalid_status_as_failed(mutations, queries):
    tools = await create_tools(mutations, 2)

    result = await mutations.bulk_update_status([t.id for t in tools], "archived")

    assert result.succeeded == 0
    assert result.failed == 2
    assert (await queries.get_stats()).active == 2
