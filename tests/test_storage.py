"""
Tests for the store adapters and the store factory.
"""

import asyncio

import pytest

from steep.config import Settings
from steep.storage import (
    Collections,
    InMemoryDocumentStore,
    TimedDocumentStore,
    create_store,
)


class SlowStore(InMemoryDocumentStore):
    """Reads hang far longer than any test timeout."""

    async def get(self, collection, id):
        await asyncio.sleep(5)
        return await super().get(collection, id)


# =============================================================================
# In-memory store
# =============================================================================


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_missing_is_none(self, store):
        assert await store.get(Collections.USERS, "nobody") is None

    @pytest.mark.asyncio
    async def test_add_returns_id(self, store):
        id = await store.add(Collections.TEAS, {"brand": "Lipton"})

        assert await store.get(Collections.TEAS, id) == {"brand": "Lipton", "id": id}

    @pytest.mark.asyncio
    async def test_documents_are_copies(self, store):
        await store.set(Collections.TEAS, "t1", {"brand": "Lipton"})

        fetched = await store.get(Collections.TEAS, "t1")
        fetched["brand"] = "changed"

        assert (await store.get(Collections.TEAS, "t1"))["brand"] == "Lipton"

    @pytest.mark.asyncio
    async def test_query_by_field(self, store):
        await store.set(Collections.TEAS, "t1", {"isPublic": True})
        await store.set(Collections.TEAS, "t2", {"isPublic": False})
        await store.set(Collections.TEAS, "t3", {})

        result = await store.query(Collections.TEAS, "isPublic", True)
        assert [doc["id"] for doc in result] == ["t1"]


# =============================================================================
# Timeouts and factory
# =============================================================================


class TestTimedDocumentStore:
    @pytest.mark.asyncio
    async def test_hung_call_times_out(self):
        store = TimedDocumentStore(SlowStore(), timeout=0.01)

        with pytest.raises(asyncio.TimeoutError):
            await store.get(Collections.USERS, "u1")

    @pytest.mark.asyncio
    async def test_fast_calls_pass_through(self):
        store = TimedDocumentStore(InMemoryDocumentStore(), timeout=1.0)

        id = await store.add(Collections.BREWS, {"teaId": "t1"})
        await store.set(Collections.USERS, "u1", {"email": "u1@example.com"})

        assert (await store.get(Collections.BREWS, id))["teaId"] == "t1"
        assert [doc["id"] for doc in await store.query(Collections.USERS, "email", "u1@example.com")] == ["u1"]


class TestCreateStore:
    def test_memory_backend_is_timed(self, settings):
        store = create_store(settings)

        assert isinstance(store, TimedDocumentStore)
        assert isinstance(store.inner, InMemoryDocumentStore)
        assert store.timeout == settings.store_timeout_seconds

    def test_unknown_backend(self):
        settings = Settings(_env_file=None, store_backend="postgres")

        with pytest.raises(ValueError, match="Unknown store backend"):
            create_store(settings)
