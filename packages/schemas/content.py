"""Content schemas: video lessons and insight (blog) posts."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from packages.common.roles import Role
from .base import DEFAULT_THUMBNAIL, AllowedRoles, Entity, Patch, Title

EXCERPT_LENGTH = 150


class VideoCategory(str, Enum):
    """Listing page a video belongs to."""
    MEMBERSHIP = "membership"
    MASTER = "master"


def _strip_blank_urls(urls: List[str]) -> List[str]:
    return [u.strip() for u in urls if u and u.strip()]


class VideoDraft(BaseModel):
    """Payload for creating a video; lesson order follows `curriculum_urls`."""
    title: Title
    description: str = ""
    is_html_description: bool = False
    thumbnail_url: str = DEFAULT_THUMBNAIL
    curriculum_urls: List[str] = []
    allowed_roles: AllowedRoles = [Role.FREE]
    is_pinned: bool = False
    category: VideoCategory = VideoCategory.MEMBERSHIP

    @field_validator("curriculum_urls")
    @classmethod
    def _curriculum(cls, v: List[str]) -> List[str]:
        return _strip_blank_urls(v)

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail(cls, v: str) -> str:
        return v.strip() or DEFAULT_THUMBNAIL


class Video(VideoDraft, Entity):
    """A stored video lesson series."""


class VideoPatch(Patch):
    """Fields of a video that may be changed after creation."""
    title: Optional[Title] = None
    description: Optional[str] = None
    is_html_description: Optional[bool] = None
    thumbnail_url: Optional[str] = None
    curriculum_urls: Optional[List[str]] = None
    allowed_roles: Optional[AllowedRoles] = None
    is_pinned: Optional[bool] = None
    category: Optional[VideoCategory] = None

    @field_validator("curriculum_urls")
    @classmethod
    def _curriculum(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else _strip_blank_urls(v)

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else (v.strip() or DEFAULT_THUMBNAIL)


class BlogPostDraft(BaseModel):
    """Payload for creating an insight post.

    A blank `excerpt` is derived from the first 150 characters of `content`
    when the post is stored.
    """
    title: Title
    content: str = Field(..., min_length=1)
    is_html_content: bool = False
    excerpt: str = ""
    thumbnail_url: str = DEFAULT_THUMBNAIL
    allowed_roles: AllowedRoles = [Role.FREE]

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail(cls, v: str) -> str:
        return v.strip() or DEFAULT_THUMBNAIL


class BlogPost(BlogPostDraft, Entity):
    """A stored insight post."""


class BlogPostPatch(Patch):
    """Fields of a post that may be changed after creation.

    Setting `excerpt` to an empty string re-derives it from the content.
    """
    title: Optional[Title] = None
    content: Optional[str] = Field(None, min_length=1)
    is_html_content: Optional[bool] = None
    excerpt: Optional[str] = None
    thumbnail_url: Optional[str] = None
    allowed_roles: Optional[AllowedRoles] = None

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else (v.strip() or DEFAULT_THUMBNAIL)


def derive_excerpt(post: BlogPost) -> BlogPost:
    """Fill a blank excerpt from the first 150 characters of the content."""
    if post.excerpt.strip():
        return post
    return post.model_copy(update={"excerpt": post.content[:EXCERPT_LENGTH]})
