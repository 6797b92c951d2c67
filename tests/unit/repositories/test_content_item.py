"""Tests for ContentItem repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.repositories.content_item import ContentItemRepository


def _compile(stmt) -> str:
    return str(
        stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    )


@pytest.mark.unit
class TestBuildAuthorQuery:
    """Tests for the SQL generated for author listings."""

    def test_selects_ids_for_author_newest_first(self):
        sql = _compile(ContentItemRepository.build_author_query(42))

        assert "SELECT content_items.id" in sql
        assert "WHERE content_items.author_id = 42" in sql
        assert "ORDER BY content_items.created_at DESC, content_items.id DESC" in sql
        assert "LIMIT 50" in sql

    def test_respects_limit_and_direction(self):
        sql = _compile(
            ContentItemRepository.build_author_query(7, sort_dir="asc", limit=5)
        )

        assert "ORDER BY content_items.created_at ASC, content_items.id ASC" in sql
        assert "LIMIT 5" in sql


@pytest.mark.unit
@pytest.mark.asyncio
class TestContentItemRepository:
    """Tests for ContentItemRepository."""

    async def test_query_by_author_returns_ids_in_result_order(self):
        mock_session = AsyncMock()
        mock_scalars = MagicMock()
        mock_scalars.all.return_value = [9, 4, 1]
        mock_result = MagicMock()
        mock_result.scalars.return_value = mock_scalars
        mock_session.execute.return_value = mock_result

        repo = ContentItemRepository(mock_session)
        result = await repo.query_by_author(42)

        assert result == [9, 4, 1]
        assert isinstance(result, list)
        mock_session.execute.assert_awaited_once()

    async def test_query_by_author_returns_empty_list(self):
        mock_session = AsyncMock()
        mock_scalars = MagicMock()
        mock_scalars.all.return_value = []
        mock_result = MagicMock()
        mock_result.scalars.return_value = mock_scalars
        mock_session.execute.return_value = mock_result

        repo = ContentItemRepository(mock_session)

        assert await repo.query_by_author(42) == []

    async def test_query_by_author_sends_limited_query(self):
        mock_session = AsyncMock()
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = mock_result

        repo = ContentItemRepository(mock_session)
        await repo.query_by_author(42, limit=10)

        stmt = mock_session.execute.await_args.args[0]
        assert "LIMIT 10" in _compile(stmt)

    async def test_get_by_id_and_author_scopes_to_author(self):
        mock_session = AsyncMock()
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        repo = ContentItemRepository(mock_session)
        result = await repo.get_by_id_and_author(5, 42)

        assert result is None
        sql = _compile(mock_session.execute.await_args.args[0])
        assert "content_items.id = 5" in sql
        assert "content_items.author_id = 42" in sql
