"""Tests for the paste service."""

import pytest
from unittest.mock import AsyncMock

from app.models.paste import MAX_TTL_SECONDS, MAX_VIEWS
from app.repositories.base import RepositoryError
from app.services.exceptions import (
    PasteCreationError,
    PasteNotFoundError,
    PasteValidationError,
)
from app.services.paste import PasteService
from app.storage import InMemoryPasteStorage


@pytest.mark.service
class TestPasteService:
    """Test suite for paste service."""

    @pytest.fixture
    def storage(self):
        return InMemoryPasteStorage()

    @pytest.fixture
    def paste_service(self, storage):
        return PasteService(storage=storage, base_url="https://paste.example.com/")

    @pytest.mark.asyncio
    async def test_create_paste(self, paste_service, storage):
        paste = await paste_service.create_paste("hello", ttl_seconds=60, max_views=3)

        assert paste.content == "hello"
        assert paste.ttl_seconds == 60
        assert paste.max_views == 3
        assert paste.id in storage.store

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t", None, 123, ["a"]])
    async def test_create_rejects_bad_content(self, paste_service, content):
        with pytest.raises(PasteValidationError, match="content is required"):
            await paste_service.create_paste(content)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, -5, 1.5, "10", True, MAX_TTL_SECONDS + 1, 10 ** 12, float("inf")])
    async def test_create_rejects_bad_ttl(self, paste_service, value):
        with pytest.raises(PasteValidationError, match="ttl_seconds must be an integer >= 1"):
            await paste_service.create_paste("hello", ttl_seconds=value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, -1, 2.5, "3", False, MAX_VIEWS + 1])
    async def test_create_rejects_bad_max_views(self, paste_service, value):
        with pytest.raises(PasteValidationError, match="max_views must be an integer >= 1"):
            await paste_service.create_paste("hello", max_views=value)

    @pytest.mark.asyncio
    async def test_create_accepts_integral_floats(self, paste_service):
        paste = await paste_service.create_paste("hello", ttl_seconds=5.0, max_views=2.0)

        assert paste.ttl_seconds == 5
        assert isinstance(paste.ttl_seconds, int)
        assert paste.max_views == 2
        assert isinstance(paste.max_views, int)

    @pytest.mark.asyncio
    async def test_longest_ttl_stays_viewable(self, paste_service):
        paste = await paste_service.create_paste("hello", ttl_seconds=MAX_TTL_SECONDS, max_views=2)

        view = await paste_service.view_paste(paste.id)

        assert view.remaining_views == 1
        assert view.expires_at.endswith("Z")

    @pytest.mark.asyncio
    async def test_create_storage_failure(self):
        storage = AsyncMock()
        storage.create_paste.side_effect = RepositoryError("disk on fire")
        paste_service = PasteService(storage=storage)

        with pytest.raises(PasteCreationError):
            await paste_service.create_paste("hello")

    @pytest.mark.asyncio
    async def test_view_paste(self, paste_service):
        paste = await paste_service.create_paste("hello", ttl_seconds=10, max_views=2)

        view = await paste_service.view_paste(paste.id)

        assert view.id == paste.id
        assert view.content == "hello"
        assert view.remaining_views == 1
        assert view.expires_at.endswith("Z")

    @pytest.mark.asyncio
    async def test_view_paste_without_limits(self, paste_service):
        paste = await paste_service.create_paste("hello")

        view = await paste_service.view_paste(paste.id)

        assert view.remaining_views is None
        assert view.expires_at is None

    @pytest.mark.asyncio
    async def test_view_paste_single_view(self, paste_service):
        paste = await paste_service.create_paste("hello", max_views=1)

        view = await paste_service.view_paste(paste.id)
        assert view.remaining_views == 0

        with pytest.raises(PasteNotFoundError):
            await paste_service.view_paste(paste.id)

    @pytest.mark.asyncio
    async def test_view_paste_after_ttl(self, paste_service):
        paste = await paste_service.create_paste("x", ttl_seconds=1)

        with pytest.raises(PasteNotFoundError):
            await paste_service.view_paste(paste.id, paste.created_at + 2000)

    @pytest.mark.asyncio
    async def test_view_paste_not_found(self, paste_service):
        with pytest.raises(PasteNotFoundError):
            await paste_service.view_paste("nosuchid")

    def test_build_url(self, paste_service):
        assert paste_service.build_url("abcd1234") == "https://paste.example.com/p/abcd1234"
