"""Slug Registry — tests for case-insensitive resolution and registration.

Tests cover:
    - register then resolve with different case returns the same entity
    - second registration for another entity conflicts, first mapping unchanged
    - unique violation on insert (pre-check raced) maps to SlugExistsError
    - resolve returns None when absent
    - generate_unique walks numbered suffixes, then falls back to random
"""

import re

import pytest

from namebind.core.errors import SlugExistsError, UniqueViolationError
from namebind.services.slug_registry import SlugRegistry


@pytest.fixture
def registry(store):
    return SlugRegistry(store)


async def test_register_then_resolve_case_insensitive(registry):
    row = await registry.register("MyTopic", "topic-1")
    assert row["slug"] == "mytopic"
    assert await registry.resolve("mytopic") == "topic-1"
    assert await registry.resolve("MYTOPIC") == "topic-1"


async def test_register_stores_name(registry):
    row = await registry.register("nostr", "topic-1", name="Nostr")
    assert row["name"] == "Nostr"
    assert row["created_at"] is not None


async def test_second_registration_conflicts(registry):
    await registry.register("MyTopic", "topic-1")
    with pytest.raises(SlugExistsError) as exc:
        await registry.register("mytopic", "topic-2")
    assert exc.value.http_status == 409
    assert await registry.resolve("MyTopic") == "topic-1"


async def test_insert_conflict_after_precheck(store):
    class RacingStore:
        """Pre-check sees nothing; the insert loses the race."""
        async def select_one(self, table, filters):
            return None

        async def insert(self, table, rows):
            raise UniqueViolationError(table)

    registry = SlugRegistry(RacingStore())
    with pytest.raises(SlugExistsError):
        await registry.register("raced", "topic-1")


async def test_resolve_missing_returns_none(registry):
    assert await registry.resolve("nothing-here") is None


async def test_is_available(registry):
    assert await registry.is_available("fresh") is True
    await registry.register("Fresh", "topic-1")
    assert await registry.is_available("FRESH") is False


async def test_generate_unique_base_free(registry):
    assert await registry.generate_unique("Nostr Devs") == "nostr-devs"


async def test_generate_unique_appends_counter(registry):
    await registry.register("nostr-devs", "t1")
    await registry.register("nostr-devs-1", "t2")
    assert await registry.generate_unique("Nostr Devs") == "nostr-devs-2"


async def test_generate_unique_empty_name_uses_default(registry):
    assert await registry.generate_unique("???") == "topic"


async def test_generate_unique_random_suffix_after_limit(store):
    class FullStore:
        async def select_one(self, table, filters):
            return {"entity_id": "taken"}

    registry = SlugRegistry(FullStore())
    slug = await registry.generate_unique("Busy")
    assert re.fullmatch(r"busy-[a-z0-9]{6}", slug)
