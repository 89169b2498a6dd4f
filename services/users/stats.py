"""Counts shown on the admin dashboard and the listing page headers."""

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from pydantic import BaseModel

from packages.common.roles import Role
from packages.schemas.community import Testimonial
from packages.schemas.content import BlogPost, Video, VideoCategory
from packages.schemas.users import User


class DashboardStats(BaseModel):
    total_users: int
    total_videos: int
    total_posts: int
    total_testimonials: int
    users_by_role: Dict[Role, int]


class VideoListingStats(BaseModel):
    total: int
    pinned: int
    lessons: int


def role_distribution(users: Iterable[User]) -> Dict[Role, int]:
    """Number of users per role; every role is present, zero when unused."""
    counts = {r: 0 for r in Role}
    for u in users:
        counts[u.role] += 1
    return counts


def dashboard_stats(
    users: list[User], videos: list[Video], posts: list[BlogPost], testimonials: list[Testimonial]
) -> DashboardStats:
    return DashboardStats(
        total_users=len(users),
        total_videos=len(videos),
        total_posts=len(posts),
        total_testimonials=len(testimonials),
        users_by_role=role_distribution(users),
    )


def video_listing_stats(videos: Iterable[Video], category: Optional[VideoCategory] = None) -> VideoListingStats:
    picked = [v for v in videos if category is None or v.category == category]
    return VideoListingStats(
        total=len(picked),
        pinned=sum(1 for v in picked if v.is_pinned),
        lessons=sum(len(v.curriculum_urls) for v in picked),
    )


def visible_testimonials(testimonials: Iterable[Testimonial]) -> int:
    return sum(1 for t in testimonials if not t.is_hidden)


def posts_this_month(posts: Iterable[BlogPost], now: Optional[datetime] = None) -> int:
    """Posts created in the current calendar month (UTC)."""
    now = now or datetime.now(timezone.utc)
    return sum(
        1 for p in posts
        if (p.created_at.year, p.created_at.month) == (now.year, now.month)
    )
