"""
Unit tests for the in-memory post store.

Tests cover:
- Seeding and id assignment
- Filtering and ordering
- Field validation on create
- Concurrent creates
"""

import asyncio

import pytest

from fragql.store import InMemoryPostStore, Post, PostStore


class TestInMemoryPostStore:
    """Tests for InMemoryPostStore."""

    @pytest.fixture
    def store(self):
        return InMemoryPostStore(
            [
                {"id": 1, "title": "Nexus", "body": "...", "published": True},
                Post(id=3, title="Draft", body="..."),
            ]
        )

    def test_implements_protocol(self, store):
        assert isinstance(store, PostStore)

    @pytest.mark.asyncio
    async def test_list_all_sorted_by_id(self, store):
        records = await store.list_records()
        assert [r.id for r in records] == [1, 3]

    @pytest.mark.asyncio
    async def test_filter_published(self, store):
        """Filter entries must equal record values."""
        drafts = await store.list_records({"published": False})
        assert [r.id for r in drafts] == [3]
        published = await store.list_records({"published": True})
        assert [r.title for r in published] == ["Nexus"]

    @pytest.mark.asyncio
    async def test_unknown_filter_key_raises(self, store):
        with pytest.raises(ValueError, match="Unknown filter fields"):
            await store.list_records({"author": "ada"})

    @pytest.mark.asyncio
    async def test_create_assigns_next_id(self, store):
        """New ids follow the highest seeded id; published defaults to False."""
        post = await store.create_record({"title": "A", "body": "B"})
        assert post == Post(id=4, title="A", body="B", published=False)
        assert await store.get_record(4) == post

    @pytest.mark.asyncio
    async def test_create_rejects_id(self, store):
        with pytest.raises(ValueError, match="assigned by the store"):
            await store.create_record({"id": 9, "title": "A", "body": "B"})

    @pytest.mark.asyncio
    async def test_create_rejects_missing_fields(self, store):
        with pytest.raises(ValueError, match="Missing required fields"):
            await store.create_record({"title": "A"})

    @pytest.mark.asyncio
    async def test_create_rejects_wrong_types(self, store):
        with pytest.raises(ValueError, match="must be a string"):
            await store.create_record({"title": 1, "body": "B"})
        with pytest.raises(ValueError, match="must be a boolean"):
            await store.create_record({"title": "A", "body": "B", "published": "yes"})

    @pytest.mark.asyncio
    async def test_get_missing_record(self, store):
        assert await store.get_record(99) is None

    def test_duplicate_seed_ids_raise(self):
        with pytest.raises(ValueError, match="duplicate ids"):
            InMemoryPostStore([Post(id=1, title="a", body="b"), Post(id=1, title="c", body="d")])

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_unique_ids(self):
        store = InMemoryPostStore()
        posts = await asyncio.gather(
            *(store.create_record({"title": f"t{i}", "body": "b"}) for i in range(20))
        )
        assert sorted(p.id for p in posts) == list(range(1, 21))

    @pytest.mark.asyncio
    async def test_close_clears_data(self, store):
        await store.close()
        assert await store.list_records() == []
