"""Tests for the portal FastAPI app."""

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from packages.common.config import DEFAULT_SEED, Settings
from packages.common.seed import SeedData, load_seed
from services.portal.app import create_app
from services.portal.container import build_container

ADMIN = {"X-Viewer-Role": "admin", "X-User-Id": "6"}
MEMBER = {"X-Viewer-Role": "member", "X-User-Id": "3"}


def _client(seed: Optional[SeedData] = None) -> AsyncClient:
    settings = Settings(SEED_ON_START=False, SIMULATED_LATENCY_MS=0)
    app = create_app(build_container(settings, seed if seed is not None else load_seed(DEFAULT_SEED)))
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_openapi_and_ping_ok() -> None:
    """OpenAPI schema endpoint should respond with HTTP 200."""
    async with _client() as ac:
        r = await ac.get("/openapi.json")
        p = await ac.get("/ping")
    if r.status_code != 200 or p.json() != {"ok": True}:
        pytest.fail(f"Expected 200, got {r.status_code}")
    assert p.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_membership_listing_is_ordered_and_gated() -> None:
    async with _client() as ac:
        r = await ac.get("/videos", params={"category": "membership"}, headers={"X-Viewer-Role": "free"})
    assert r.status_code == 200
    cards = r.json()
    # seed: id 2 pinned, then 4 and 1 newest first
    assert [c["id"] for c in cards] == [2, 4, 1]
    assert [c["locked"] for c in cards] == [True, True, False]
    assert "curriculum_urls" not in cards[0]
    assert cards[0]["lesson_count"] == 2


@pytest.mark.asyncio
async def test_video_search_and_detail() -> None:
    async with _client() as ac:
        found = await ac.get("/videos", params={"q": "NEGOTIATION"})
        detail = await ac.get("/videos/3", headers={"X-Viewer-Role": "both"})
        locked = await ac.get("/videos/3", headers=MEMBER)
        missing = await ac.get("/videos/999")
    assert [c["id"] for c in found.json()] == [3]
    assert detail.json()["lessons"][0]["embed_url"].startswith("https://www.youtube.com/embed/")
    assert locked.json()["locked"] is True and locked.json()["lessons"] == []
    assert missing.status_code == 404
    assert missing.json()["kind"] == "video"


@pytest.mark.asyncio
async def test_unknown_viewer_role_is_rejected() -> None:
    async with _client() as ac:
        r = await ac.get("/videos", headers={"X-Viewer-Role": "owner"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_video_writes_require_admin() -> None:
    body = {"title": "New lesson", "curriculum_urls": ["https://youtu.be/a", ""], "allowed_roles": ["member"]}
    async with _client() as ac:
        denied = await ac.post("/videos", json=body, headers=MEMBER)
        created = await ac.post("/videos", json=body, headers=ADMIN)
        vid = created.json()["id"]
        patched = await ac.patch(f"/videos/{vid}", json={"is_pinned": True}, headers=ADMIN)
        invalid = await ac.patch(f"/videos/{vid}", json={"allowed_roles": []}, headers=ADMIN)
        deleted = await ac.delete(f"/videos/{vid}", headers=ADMIN)
        gone = await ac.delete(f"/videos/{vid}", headers=ADMIN)
    assert denied.status_code == 403
    assert created.status_code == 201
    assert vid == 6
    assert created.json()["curriculum_urls"] == ["https://youtu.be/a"]
    assert patched.json()["is_pinned"] is True and patched.json()["title"] == "New lesson"
    assert invalid.status_code == 422
    assert deleted.json() == {"ok": True}
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_insights_search_detail_and_related() -> None:
    async with _client() as ac:
        found = await ac.get("/insights", params={"q": "intro"})
        listing = await ac.get("/insights")
        locked = await ac.get("/insights/3", headers=MEMBER)
        related = await ac.get("/insights/4/related")
    assert [c["id"] for c in found.json()] == [2]
    assert [c["id"] for c in listing.json()] == [4, 3, 2, 1]
    assert locked.json()["locked"] is True
    assert locked.json()["content"] != "" and "value-based" not in locked.json()["content"]
    assert [c["id"] for c in related.json()] == [3, 2, 1]


@pytest.mark.asyncio
async def test_post_created_without_excerpt_gets_one() -> None:
    async with _client(SeedData()) as ac:
        r = await ac.post("/insights", json={"title": "T", "content": "c" * 300}, headers=ADMIN)
        bad = await ac.post("/insights", json={"title": "", "content": "x"}, headers=ADMIN)
    assert r.json()["excerpt"] == "c" * 150
    assert r.json()["id"] == 1
    assert bad.status_code == 422


@pytest.mark.asyncio
async def test_testimonial_flow() -> None:
    async with _client(SeedData()) as ac:
        anon = await ac.post("/testimonials", json={"content": "hi"})
        mine = await ac.post("/testimonials", json={"content": "Mine", "user_id": "999"}, headers=MEMBER)
        tid = mine.json()["id"]
        other = await ac.patch(f"/testimonials/{tid}", json={"content": "x"}, headers={"X-User-Id": "4"})
        edited = await ac.patch(f"/testimonials/{tid}", json={"content": "Mine, edited"}, headers=MEMBER)
        second = await ac.post("/testimonials", json={"content": "Later"}, headers={"X-User-Id": "4"})
        not_admin = await ac.post(f"/testimonials/{tid}/visibility", headers=MEMBER)
        hidden = await ac.post(f"/testimonials/{second.json()['id']}/visibility", headers=ADMIN)
        listing = await ac.get("/testimonials", headers=MEMBER)
        stats = await ac.get("/testimonials/stats")
    assert anon.status_code == 401
    assert mine.json()["user_id"] == "3"
    assert other.status_code == 403
    assert edited.json()["content"] == "Mine, edited"
    assert not_admin.status_code == 403
    assert hidden.json()["is_hidden"] is True
    rows = listing.json()
    assert [r["id"] for r in rows] == [tid, second.json()["id"]]
    assert rows[0]["can_edit"] is True and rows[1]["can_edit"] is False
    assert stats.json() == {"total": 2, "visible": 1}


@pytest.mark.asyncio
async def test_admin_dashboard() -> None:
    async with _client() as ac:
        denied = await ac.get("/admin/users", headers=MEMBER)
        users = await ac.get("/admin/users", headers=ADMIN)
        changed = await ac.patch("/admin/users/1/role", json={"role": "both"}, headers=ADMIN)
        bad = await ac.patch("/admin/users/1/role", json={"role": "owner"}, headers=ADMIN)
        missing = await ac.patch("/admin/users/77/role", json={"role": "free"}, headers=ADMIN)
        stats = await ac.get("/admin/stats", headers=ADMIN)
        roles = await ac.get("/admin/roles", headers=ADMIN)
    assert denied.status_code == 403
    assert len(users.json()) == 6
    assert changed.json()["role"] == "both"
    assert bad.status_code == 422
    assert missing.status_code == 404
    body = stats.json()
    assert body["users_by_role"] == {"free": 0, "member": 2, "master": 1, "both": 2, "admin": 1}
    assert (body["total_videos"], body["total_posts"], body["total_testimonials"]) == (5, 4, 4)
    assert [r["value"] for r in roles.json()] == ["free", "member", "master", "both", "admin"]


@pytest.mark.asyncio
async def test_home_shows_three_newest() -> None:
    async with _client() as ac:
        r = await ac.get("/home")
    body = r.json()
    assert [v["id"] for v in body["videos"]] == [5, 4, 3]
    assert [p["id"] for p in body["posts"]] == [4, 3, 2]


@pytest.mark.asyncio
async def test_apps_do_not_share_state() -> None:
    async with _client() as first:
        await first.delete("/videos/1", headers=ADMIN)
    async with _client() as second:
        r = await second.get("/videos/1")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_listing_stats() -> None:
    async with _client() as ac:
        videos = await ac.get("/videos/stats", params={"category": "master"})
        posts = await ac.get("/insights/stats")
    assert videos.json() == {"total": 2, "pinned": 1, "lessons": 3}
    assert posts.json()["total"] == 4


@pytest.mark.asyncio
async def test_player_current_lesson() -> None:
    async with _client() as ac:
        second = await ac.get("/videos/5", params={"lesson": 1}, headers=ADMIN)
        fallback = await ac.get("/videos/5", params={"lesson": 9}, headers=ADMIN)
        locked = await ac.get("/videos/5", params={"lesson": 1}, headers=MEMBER)
    assert second.json()["current_lesson"] == "https://player.vimeo.com/video/76979871"
    assert fallback.json()["current_lesson"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert locked.json()["current_lesson"] is None


@pytest.mark.asyncio
async def test_naive_seed_timestamps_do_not_break_listings() -> None:
    seed = SeedData(posts=[{"id": 1, "title": "Old", "content": "body", "created_at": "2024-01-01T00:00:00"}])
    async with _client(seed) as ac:
        created = await ac.post("/insights", json={"title": "New", "content": "fresh"}, headers=ADMIN)
        listing = await ac.get("/insights")
        home = await ac.get("/home")
    assert listing.status_code == 200
    assert [p["id"] for p in listing.json()] == [created.json()["id"], 1]
    assert [p["id"] for p in home.json()["posts"]] == [2, 1]
