"""Service facades for video lessons and insight posts."""

from packages.common.service import CrudService
from packages.schemas.content import (
    BlogPost,
    BlogPostDraft,
    BlogPostPatch,
    Video,
    VideoDraft,
    VideoPatch,
)


class VideoService(CrudService[Video]):
    kind = "video"
    draft_model = VideoDraft
    patch_model = VideoPatch


class BlogService(CrudService[BlogPost]):
    kind = "post"
    draft_model = BlogPostDraft
    patch_model = BlogPostPatch
