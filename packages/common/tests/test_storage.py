"""Tests for the in-memory collection store and id allocation."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from packages.common.errors import NotFoundError
from packages.common.ordering import order_posts
from packages.common.roles import Role
from packages.common.storage import CollectionStore, next_id
from packages.schemas.content import BlogPost, BlogPostDraft, derive_excerpt
from packages.schemas.users import User, UserDraft

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _ticking_clock():
    ticks = iter(range(10_000))
    return lambda: T0 + timedelta(minutes=next(ticks))


def _users() -> CollectionStore[User]:
    return CollectionStore("user", User, clock=_ticking_clock())


def test_next_id_empty_and_gaps() -> None:
    assert next_id([]) == 1
    users = [User(id=i, email=f"u{i}@example.com", created_at=T0) for i in (7, 2, 4)]
    assert next_id(users) == 8


@pytest.mark.asyncio
async def test_sequential_creates_issue_one_to_n() -> None:
    store = _users()
    ids = [(await store.create(UserDraft(email=f"u{i}@example.com"))).id for i in range(5)]
    if ids != [1, 2, 3, 4, 5]:
        pytest.fail(f"Expected ids 1..5, got {ids}")


@pytest.mark.asyncio
async def test_create_prepends_and_stamps_created_at() -> None:
    store = _users()
    first = await store.create(UserDraft(email="a@example.com"))
    second = await store.create(UserDraft(email="b@example.com"))
    listed = await store.get_all()
    assert [u.id for u in listed] == [second.id, first.id]
    assert second.created_at > first.created_at
    assert first.role is Role.FREE


@pytest.mark.asyncio
async def test_round_trip_and_idempotent_reads() -> None:
    store = _users()
    created = await store.create(UserDraft(email="a@example.com", role=Role.MEMBER))
    assert await store.get_by_id(created.id) == created
    assert await store.get_all() == await store.get_all()


@pytest.mark.asyncio
async def test_returned_records_are_copies() -> None:
    store = CollectionStore("post", BlogPost, clock=_ticking_clock())
    post = await store.create(BlogPostDraft(title="T", content="body", allowed_roles=[Role.MEMBER]))
    post.allowed_roles.append(Role.ADMIN)
    post.title = "mutated"
    (await store.get_all())[0].allowed_roles.clear()
    stored = await store.get_by_id(post.id)
    assert stored.title == "T"
    assert stored.allowed_roles == [Role.MEMBER]


@pytest.mark.asyncio
async def test_update_merges_and_protects_identity() -> None:
    store = _users()
    created = await store.create(UserDraft(email="a@example.com"))
    updated = await store.update(created.id, {"role": Role.MASTER, "id": 99, "created_at": T0 - timedelta(days=1)})
    assert updated.role is Role.MASTER
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.email == created.email


@pytest.mark.asyncio
async def test_missing_ids_raise_not_found() -> None:
    store = _users()
    await store.create(UserDraft(email="a@example.com"))
    for op in (store.get_by_id(42), store.update(42, {"role": Role.ADMIN}), store.delete(42)):
        with pytest.raises(NotFoundError) as info:
            await op
        assert info.value.entity_id == 42
    assert len(store) == 1


@pytest.mark.asyncio
async def test_delete_then_lookup_fails() -> None:
    store = _users()
    created = await store.create(UserDraft(email="a@example.com"))
    assert await store.delete(created.id) is True
    with pytest.raises(NotFoundError):
        await store.get_by_id(created.id)


@pytest.mark.asyncio
async def test_ids_not_reused_after_deleting_newest() -> None:
    store = _users()
    await store.create(UserDraft(email="a@example.com"))
    newest = await store.create(UserDraft(email="b@example.com"))
    await store.delete(newest.id)
    again = await store.create(UserDraft(email="c@example.com"))
    assert again.id == newest.id + 1


@pytest.mark.asyncio
async def test_seeded_store_allocates_above_seed() -> None:
    seed = [User(id=10, email="x@example.com", created_at=T0)]
    store = CollectionStore("user", User, seed)
    created = await store.create(UserDraft(email="y@example.com"))
    assert created.id == 11
    seed[0].email = "changed@example.com"
    assert (await store.get_by_id(10)).email == "x@example.com"


@pytest.mark.asyncio
async def test_normalize_hook_runs_on_create_and_update() -> None:
    store = CollectionStore("post", BlogPost, normalize=derive_excerpt)
    post = await store.create(BlogPostDraft(title="T", content="x" * 200))
    assert post.excerpt == "x" * 150
    kept = await store.update(post.id, {"content": "short"})
    assert kept.excerpt == "x" * 150
    rederived = await store.update(post.id, {"excerpt": ""})
    assert rederived.excerpt == "short"


@pytest.mark.asyncio
async def test_latency_is_applied_before_operation() -> None:
    store = CollectionStore("user", User, latency=0.01)
    created = await store.create(UserDraft(email="a@example.com"))
    assert (await store.get_by_id(created.id)).email == "a@example.com"


@pytest.mark.asyncio
async def test_naive_seed_timestamps_sort_with_new_records() -> None:
    seed = [BlogPost(id=1, title="Old", content="body", created_at="2024-01-01T00:00:00")]
    assert seed[0].created_at.tzinfo is timezone.utc
    store = CollectionStore("post", BlogPost, seed, normalize=derive_excerpt)
    created = await store.create(BlogPostDraft(title="New", content="body"))
    listed = order_posts(await store.get_all())
    assert [p.id for p in listed] == [created.id, 1]


@pytest.mark.asyncio
async def test_overlapping_creates_issue_distinct_sequential_ids() -> None:
    store = CollectionStore("user", User, latency=0.005)
    created = await asyncio.gather(*(store.create(UserDraft(email=f"u{i}@example.com")) for i in range(10)))
    if sorted(u.id for u in created) != list(range(1, 11)):
        pytest.fail(f"Expected ids 1..10, got {[u.id for u in created]}")
    assert len(store) == 10
