# services/content/routes.py
"""Video and insight endpoints.

Listings apply the ordering policy first, then the search filter, then mark
each item locked or unlocked for the current viewer.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status

from packages.common.auth import Viewer, get_viewer
from packages.common.ordering import order_posts, order_videos, related_posts, search
from packages.common.rbac import require_admin
from packages.schemas.content import BlogPost, Video, VideoCategory
from services.portal.container import Container, get_container
from services.users.stats import VideoListingStats, posts_this_month, video_listing_stats
from .views import PostCard, PostDetail, VideoCard, VideoDetail, post_card, post_detail, video_card, video_detail

router = APIRouter()


# ---------------------- Videos ----------------------
@router.get("/videos", response_model=List[VideoCard], tags=["videos"])
async def list_videos(
    category: Optional[VideoCategory] = None,
    q: Optional[str] = None,
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> List[VideoCard]:
    videos = search(order_videos(await c.videos.get_all(), category), q)
    return [video_card(v, viewer.role) for v in videos]


@router.get("/videos/stats", response_model=VideoListingStats, tags=["videos"])
async def videos_stats(category: Optional[VideoCategory] = None, c: Container = Depends(get_container)) -> VideoListingStats:
    return video_listing_stats(await c.videos.get_all(), category)


@router.get("/videos/{video_id}", response_model=VideoDetail, tags=["videos"])
async def read_video(
    video_id: int,
    lesson: int = 0,
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> VideoDetail:
    return video_detail(await c.videos.get_by_id(video_id), viewer.role, lesson)


@router.post("/videos", response_model=Video, status_code=status.HTTP_201_CREATED, tags=["videos"])
async def create_video(
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> Video:
    return await c.videos.create(payload, actor_id=admin.user_id)


@router.patch("/videos/{video_id}", response_model=Video, tags=["videos"])
async def update_video(
    video_id: int,
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> Video:
    return await c.videos.update(video_id, payload, actor_id=admin.user_id)


@router.delete("/videos/{video_id}", tags=["videos"])
async def delete_video(video_id: int, admin: Viewer = Depends(require_admin), c: Container = Depends(get_container)) -> Dict[str, bool]:
    return {"ok": await c.videos.delete(video_id, actor_id=admin.user_id)}


# ---------------------- Insights ----------------------
@router.get("/insights", response_model=List[PostCard], tags=["insights"])
async def list_posts(
    q: Optional[str] = None,
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> List[PostCard]:
    posts = search(order_posts(await c.posts.get_all()), q)
    return [post_card(p, viewer.role) for p in posts]


@router.get("/insights/stats", tags=["insights"])
async def posts_stats(c: Container = Depends(get_container)) -> Dict[str, int]:
    posts = await c.posts.get_all()
    return {"total": len(posts), "this_month": posts_this_month(posts)}


@router.get("/insights/{post_id}", response_model=PostDetail, tags=["insights"])
async def read_post(post_id: int, viewer: Viewer = Depends(get_viewer), c: Container = Depends(get_container)) -> PostDetail:
    return post_detail(await c.posts.get_by_id(post_id), viewer.role)


@router.get("/insights/{post_id}/related", response_model=List[PostCard], tags=["insights"])
async def read_related(
    post_id: int,
    limit: int = 3,
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> List[PostCard]:
    current = await c.posts.get_by_id(post_id)
    return [post_card(p, viewer.role) for p in related_posts(await c.posts.get_all(), current.id, limit)]


@router.post("/insights", response_model=BlogPost, status_code=status.HTTP_201_CREATED, tags=["insights"])
async def create_post(
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> BlogPost:
    return await c.posts.create(payload, actor_id=admin.user_id)


@router.patch("/insights/{post_id}", response_model=BlogPost, tags=["insights"])
async def update_post(
    post_id: int,
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> BlogPost:
    return await c.posts.update(post_id, payload, actor_id=admin.user_id)


@router.delete("/insights/{post_id}", tags=["insights"])
async def delete_post(post_id: int, admin: Viewer = Depends(require_admin), c: Container = Depends(get_container)) -> Dict[str, bool]:
    return {"ok": await c.posts.delete(post_id, actor_id=admin.user_id)}
