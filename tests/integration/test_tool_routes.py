"""
Integration tests for the public tool routes.

Tests listing, lookup and submission through the HTTP API, including the
error envelope every failure is rendered with.
"""

import uuid

import pytest
from fastapi import status

from toolkit_service.db import get_session_factory
from toolkit_service.dependencies.app_deps import get_docs_dir
from toolkit_service.main import app

from tests.fixtures.tools import create_tools, tool_payload
from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_list_tools(client, mutations):
    await create_tools(mutations, 12)
    await create_tools(mutations, 2, status="pending")

    response = await client.get("/tools/", params={"page": 2})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert len(data["data"]) == 2
    assert data["pagination"] == {"page": 2, "limit": 10, "total": 12, "totalPages": 2}


@pytest.mark.asyncio
async def test_list_tools_with_filters(client, mutations):
    await mutations.create_tool(tool_payload(title="Figma", category="design-tools"))
    await mutations.create_tool(tool_payload(title="Figma CLI", category="developer-tools"))

    response = await client.get(
        "/tools/", params={"search": "FIGMA", "category": "design-tools"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert [t["title"] for t in response.json()["data"]] == ["Figma"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"limit": 500}, {"status": "archived"}, {"page": "abc"}],
)
async def test_list_tools_invalid_parameters(client, params):
    response = await client.get("/tools/", params=params)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_create_tool_anonymously(client):
    response = await client.post(
        "/tools/",
        json={
            "title": "VS Code",
            "description": "Editor",
            "url": "https://code.visualstudio.com",
            "category": "developer-tools",
        },
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Tool created successfully"
    assert body["data"]["status"] == "active"
    assert body["data"]["featured"] is False
    assert body["data"]["created_by"] is None
    uuid.UUID(body["data"]["id"])


@pytest.mark.asyncio
async def test_create_tool_records_caller(client, test_user):
    response = await client.post(
        "/tools/", json=tool_payload(), headers=auth_headers(test_user.id)
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["created_by"] == str(test_user.id)


@pytest.mark.asyncio
async def test_create_tool_unknown_caller(client):
    response = await client.post(
        "/tools/", json=tool_payload(), headers=auth_headers(uuid.uuid4())
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"success": False, "error": "Invalid user reference"}


@pytest.mark.asyncio
async def test_create_tool_invalid_token(client):
    response = await client.post(
        "/tools/", json=tool_payload(), headers={"Authorization": "Bearer garbage"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_create_tool_validation_error(client):
    response = await client.post("/tools/", json=tool_payload(url="not-a-url"))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert "Invalid URL format" in body["error"]
    assert body["details"] == [
        {"field": "url", "rule": "invalid_url", "message": "Invalid URL format"}
    ]


@pytest.mark.asyncio
async def test_create_tool_duplicate_url(client):
    payload = tool_payload(url="https://dup.example.com")
    assert (await client.post("/tools/", json=payload)).status_code == 201

    response = await client.post("/tools/", json=tool_payload(url="https://dup.example.com"))

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "Tool with this URL already exists"


@pytest.mark.asyncio
async def test_get_tool(client, mutations):
    created = await mutations.create_tool(tool_payload(title="Lookup"))

    response = await client.get(f"/tools/{created.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Lookup"


@pytest.mark.asyncio
async def test_get_tool_not_found(client):
    response = await client.get(f"/tools/{uuid.uuid4()}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_featured_latest_and_category_listings(client, mutations):
    await mutations.create_tool(tool_payload(category="design-tools", featured=True))
    await mutations.create_tool(tool_payload(category="learning-reference"))

    featured = await client.get("/tools/featured")
    latest = await client.get("/tools/latest", params={"limit": 1})
    by_category = await client.get("/tools/categories/learning-reference")
    bad_category = await client.get("/tools/categories/spreadsheets")

    assert [t["category"] for t in featured.json()] == ["design-tools"]
    assert [t["category"] for t in latest.json()] == ["learning-reference"]
    assert [t["category"] for t in by_category.json()] == ["learning-reference"]
    assert bad_category.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_docs_index(client, tmp_path):
    (tmp_path / "guides").mkdir()
    (tmp_path / "guides" / "intro.md").write_text("---\ntitle: Intro\n---\nHi\n")
    app.dependency_overrides[get_docs_dir] = lambda: tmp_path

    response = await client.get("/docs-index")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["total_files"] == 1
    assert data["categories"] == ["guides"]
    assert data["docs"][0]["name"] == "Intro"


@pytest.mark.asyncio
async def test_docs_index_missing_directory(client, tmp_path):
    app.dependency_overrides[get_docs_dir] = lambda: tmp_path / "missing"

    response = await client.get("/docs-index")

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health/")
    db_response = await client.get("/health/db")

    assert response.json()["status"] == "healthy"
    assert db_response.status_code == status.HTTP_200_OK
    assert db_response.json()["connected"] is True


@pytest.mark.asyncio
async def test_list_tools_unreachable_store_returns_500(client, unreachable_session_factory):
    app.dependency_overrides[get_session_factory] = lambda: unreachable_session_factory

    response = await client.get("/tools/")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    body = response.json()
    assert body["success"] is False
    assert body["error"]
