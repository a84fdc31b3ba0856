"""Asset Version Manager — tests for replace/save/list and best-effort steps.

Tests cover:
    - replace activates new version, deactivates old, updates topic pointer
    - unlisted requester → UnauthorizedError with no asset rows touched
    - missing/malformed moderators → fail-open success (or denial when fail-closed)
    - unknown topic → ResourceNotFoundError
    - topic lookup failure → proceeds, reported as degraded
    - deactivate failure → new row still inserted, two active rows remain
    - pointer update failure → success with stale pointer
    - insert failure → StoreError
"""

import pytest

from namebind.core.domain_types import AssetSlot
from namebind.core.errors import ResourceNotFoundError, StoreError, UnauthorizedError
from namebind.services.asset_versions import AssetVersionManager


@pytest.fixture
def manager(flaky_store):
    return AssetVersionManager(flaky_store, fail_open=True)


async def _active(store, entity_id="topic-1", slot="icon"):
    return await store.select(
        "asset_versions", {"entity_id": entity_id, "slot": slot, "is_active": True},
    )


async def test_replace_first_version(manager, store, seed_topic):
    await seed_topic()
    outcome = await manager.replace_active("topic-1", AssetSlot.ICON, "/v1.png", "pk_mod")

    assert outcome.degraded_steps == []
    assert outcome.asset["path"] == "/v1.png"
    assert outcome.asset["is_active"] is True
    assert outcome.asset["created_by"] == "pk_mod"
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert topic["image"] == "/v1.png"


async def test_replace_keeps_exactly_one_active(manager, store, seed_topic):
    await seed_topic()
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v1.png", "pk_mod")
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v2.png", "pk_mod")

    active = await _active(store)
    assert [a["path"] for a in active] == ["/v2.png"]
    assert len(await store.select("asset_versions", {"entity_id": "topic-1"})) == 2


async def test_slots_are_independent(manager, store, seed_topic):
    await seed_topic()
    await manager.replace_active("topic-1", AssetSlot.ICON, "/icon.png", "pk_mod")
    await manager.replace_active("topic-1", AssetSlot.BANNER, "/banner.png", "pk_mod")

    assert len(await _active(store, slot="icon")) == 1
    assert len(await _active(store, slot="banner")) == 1
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert (topic["image"], topic["banner"]) == ("/icon.png", "/banner.png")


async def test_unlisted_requester_unauthorized(manager, store, seed_topic):
    await seed_topic()
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v1.png", "pk_mod")

    with pytest.raises(UnauthorizedError) as exc:
        await manager.replace_active("topic-1", AssetSlot.ICON, "/evil.png", "pk_intruder")
    assert exc.value.http_status == 403

    assert [a["path"] for a in await _active(store)] == ["/v1.png"]
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert topic["image"] == "/v1.png"


async def test_empty_moderator_list_denies(manager, seed_topic):
    await seed_topic(moderators=[])
    with pytest.raises(UnauthorizedError):
        await manager.replace_active("topic-1", AssetSlot.ICON, "/x.png", "pk_mod")


@pytest.mark.parametrize("moderators", [None, {"pk_mod": True}, "pk_mod"])
async def test_malformed_moderators_fail_open(manager, store, seed_topic, moderators):
    await seed_topic(moderators=moderators)
    outcome = await manager.replace_active("topic-1", AssetSlot.ICON, "/x.png", "anyone")
    assert outcome.asset["path"] == "/x.png"
    assert len(await _active(store)) == 1


async def test_malformed_moderators_fail_closed(store, seed_topic):
    await seed_topic(moderators=None)
    manager = AssetVersionManager(store, fail_open=False)
    with pytest.raises(UnauthorizedError):
        await manager.replace_active("topic-1", AssetSlot.ICON, "/x.png", "anyone")
    assert await _active(store) == []


async def test_unknown_topic_not_found(manager, store):
    with pytest.raises(ResourceNotFoundError):
        await manager.replace_active("missing", AssetSlot.ICON, "/x.png", "pk_mod")
    assert await store.select("asset_versions", {}) == []


async def test_topic_lookup_failure_proceeds(manager, flaky_store, store, seed_topic):
    await seed_topic()
    flaky_store.failures.add(("select", "topics"))

    outcome = await manager.replace_active("topic-1", AssetSlot.ICON, "/x.png", "anyone")
    assert outcome.degraded_steps == ["fetch_moderators"]
    assert len(await _active(store)) == 1


async def test_deactivate_failure_still_inserts(manager, flaky_store, store, seed_topic):
    await seed_topic()
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v1.png", "pk_mod")

    flaky_store.failures.add(("update", "asset_versions"))
    outcome = await manager.replace_active("topic-1", AssetSlot.ICON, "/v2.png", "pk_mod")

    assert outcome.degraded_steps == ["deactivate_previous"]
    assert {a["path"] for a in await _active(store)} == {"/v1.png", "/v2.png"}
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert topic["image"] == "/v2.png"


async def test_pointer_failure_still_succeeds(manager, flaky_store, store, seed_topic):
    await seed_topic(image="/old.png")
    flaky_store.failures.add(("update", "topics"))

    outcome = await manager.replace_active("topic-1", AssetSlot.ICON, "/new.png", "pk_mod")

    assert outcome.degraded_steps == ["update_pointer"]
    assert [a["path"] for a in await _active(store)] == ["/new.png"]
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert topic["image"] == "/old.png"


async def test_degraded_steps_logged(manager, flaky_store, seed_topic, caplog):
    await seed_topic()
    flaky_store.failures.add(("update", "topics"))
    with caplog.at_level("WARNING", logger="namebind.services.asset_versions"):
        await manager.replace_active("topic-1", AssetSlot.BANNER, "/b.png", "pk_mod")
    steps = [getattr(r, "degraded_step", None) for r in caplog.records]
    assert "update_pointer" in steps


async def test_insert_failure_raises(manager, flaky_store, store, seed_topic):
    await seed_topic()
    flaky_store.failures.add(("insert", "asset_versions"))
    with pytest.raises(StoreError):
        await manager.replace_active("topic-1", AssetSlot.ICON, "/x.png", "pk_mod")


async def test_save_initial_both_slots(manager, store, seed_topic):
    await seed_topic()
    outcome = await manager.save_initial(
        "topic-1", {AssetSlot.ICON: "/i.png", AssetSlot.BANNER: "/b.png"}, "pk_creator",
    )
    assert {a["slot"] for a in outcome.assets} == {"icon", "banner"}
    assert outcome.degraded_steps == []
    topic = await store.select_one("topics", {"id": "topic-1"})
    assert (topic["image"], topic["banner"]) == ("/i.png", "/b.png")


async def test_save_initial_skips_moderator_check(manager, seed_topic):
    await seed_topic(moderators=[])
    outcome = await manager.save_initial("topic-1", {AssetSlot.ICON: "/i.png"}, "pk_new")
    assert len(outcome.assets) == 1


async def test_active_assets(manager, seed_topic):
    await seed_topic()
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v1.png", "pk_mod")
    await manager.replace_active("topic-1", AssetSlot.ICON, "/v2.png", "pk_mod")
    await manager.replace_active("topic-1", AssetSlot.BANNER, "/b.png", "pk_mod")

    active = await manager.active_assets("topic-1")
    assert {(a["slot"], a["path"]) for a in active} == {
        ("icon", "/v2.png"), ("banner", "/b.png"),
    }
