"""Role-gated views of videos and posts for listing and detail pages.

Denied items are never dropped from a listing. They are returned with
`locked=True`: title, thumbnail and required roles stay visible while the
lesson URLs or the post body are withheld.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from packages.common.rbac import can_access
from packages.common.roles import Role
from packages.schemas.content import BlogPost, Video, VideoCategory
from .lessons import embed_url, lesson_at, lesson_thumbnail

LOCKED_PLACEHOLDER = "This content is available to higher membership tiers."


class Lesson(BaseModel):
    number: int
    url: str
    embed_url: str
    thumbnail_url: Optional[str] = None


class VideoCard(BaseModel):
    id: int
    title: str
    description: str
    is_html_description: bool
    thumbnail_url: str
    allowed_roles: List[Role]
    is_pinned: bool
    category: VideoCategory
    created_at: datetime
    lesson_count: int
    locked: bool


class VideoDetail(VideoCard):
    lessons: List[Lesson] = []
    current_lesson: Optional[str] = None


class PostCard(BaseModel):
    id: int
    title: str
    excerpt: str
    thumbnail_url: str
    allowed_roles: List[Role]
    created_at: datetime
    locked: bool


class PostDetail(PostCard):
    content: str
    is_html_content: bool


def video_card(video: Video, viewer_role: Role) -> VideoCard:
    return VideoCard(
        **video.model_dump(exclude={"curriculum_urls"}),
        lesson_count=len(video.curriculum_urls),
        locked=not can_access(viewer_role, video.allowed_roles),
    )


def video_detail(video: Video, viewer_role: Role, lesson: int = 0) -> VideoDetail:
    """Player view; lessons are numbered from 1 and only listed when unlocked.

    `current_lesson` is the player URL of lesson index `lesson`, falling back
    to the first lesson when the index is out of range.
    """
    card = video_card(video, viewer_role)
    if card.locked:
        return VideoDetail(**card.model_dump())
    lessons = [
        Lesson(number=i + 1, url=u, embed_url=embed_url(u), thumbnail_url=lesson_thumbnail(u))
        for i, u in enumerate(video.curriculum_urls)
    ]
    return VideoDetail(**card.model_dump(), lessons=lessons, current_lesson=embed_url(lesson_at(video, lesson)))


def post_card(post: BlogPost, viewer_role: Role) -> PostCard:
    return PostCard(
        **post.model_dump(include=set(PostCard.model_fields) - {"locked"}),
        locked=not can_access(viewer_role, post.allowed_roles),
    )


def post_detail(post: BlogPost, viewer_role: Role) -> PostDetail:
    card = post_card(post, viewer_role)
    if card.locked:
        return PostDetail(**card.model_dump(), content=LOCKED_PLACEHOLDER, is_html_content=False)
    return PostDetail(**card.model_dump(), content=post.content, is_html_content=post.is_html_content)
