"""
Integration tests for content create/delete endpoints.

The database session is a mock; these tests check status codes, ownership
scoping and cache invalidation on writes.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.auth import CallerIdentity, get_caller_identity
from src.core.database import get_db
from src.main import app
from src.models.orm.content_item import ContentItem
from src.services.cache_tags import get_cache_tag_service


@pytest.fixture
def mock_session():
    """Async session mock that assigns an id and timestamp on refresh."""
    session = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.delete = AsyncMock()
    session.execute = AsyncMock()

    async def _refresh(entity):
        entity.id = 501
        entity.created_at = datetime(2026, 1, 1, tzinfo=UTC)

    session.refresh = AsyncMock(side_effect=_refresh)
    return session


@pytest.fixture
def mock_cache():
    cache = AsyncMock()
    cache.invalidate_tags = AsyncMock(return_value=1)
    return cache


@pytest_asyncio.fixture
async def client(mock_session, mock_cache):
    app.dependency_overrides[get_db] = lambda: mock_session
    app.dependency_overrides[get_cache_tag_service] = lambda: mock_cache

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def as_caller(user_id: int | None) -> None:
    identity = CallerIdentity(user_id=user_id)
    app.dependency_overrides[get_caller_identity] = lambda: identity


def _lookup_returns(session: MagicMock, item: ContentItem | None) -> None:
    result = MagicMock()
    result.scalar_one_or_none.return_value = item
    session.execute.return_value = result


@pytest.mark.integration
class TestCreateContent:
    async def test_create_returns_item_and_invalidates(
        self, client: AsyncClient, mock_session, mock_cache
    ):
        as_caller(42)

        response = await client.post("/api/content", json={"title": "Hello"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 501
        assert data["author_id"] == 42
        assert data["title"] == "Hello"
        mock_session.commit.assert_awaited()
        mock_cache.invalidate_tags.assert_awaited_once_with(["user_content:42"])

    async def test_create_requires_authentication(self, client: AsyncClient, mock_cache):
        as_caller(None)

        response = await client.post("/api/content", json={"title": "Hello"})

        assert response.status_code == 401
        mock_cache.invalidate_tags.assert_not_awaited()

    async def test_create_rejects_empty_title(self, client: AsyncClient):
        as_caller(42)

        response = await client.post("/api/content", json={"title": ""})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


@pytest.mark.integration
class TestDeleteContent:
    async def test_delete_missing_item_returns_404(
        self, client: AsyncClient, mock_session, mock_cache
    ):
        _lookup_returns(mock_session, None)
        as_caller(42)

        response = await client.delete("/api/content/999")

        assert response.status_code == 404
        mock_session.delete.assert_not_awaited()
        mock_cache.invalidate_tags.assert_not_awaited()

    async def test_delete_owned_item_invalidates(
        self, client: AsyncClient, mock_session, mock_cache
    ):
        item = ContentItem(id=7, author_id=42, title="Old")
        _lookup_returns(mock_session, item)
        as_caller(42)

        response = await client.delete("/api/content/7")

        assert response.status_code == 204
        mock_session.delete.assert_awaited_once_with(item)
        mock_session.commit.assert_awaited()
        mock_cache.invalidate_tags.assert_awaited_once_with(["user_content:42"])

    async def test_delete_requires_authentication(self, client: AsyncClient):
        as_caller(None)

        response = await client.delete("/api/content/7")

        assert response.status_code == 401


@pytest.mark.integration
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
