"""Listing order and free-text filtering applied after retrieval.

All helpers are pure: they return new lists and never touch a store.
"""

from typing import Iterable, List, Optional, Sequence, TypeVar

from packages.schemas.base import Entity
from packages.schemas.community import Testimonial
from packages.schemas.content import BlogPost, Video, VideoCategory

T = TypeVar("T", bound=Entity)


def newest_first(items: Iterable[T]) -> List[T]:
    """Sort by `created_at` descending; equal timestamps keep their input order."""
    return sorted(items, key=lambda x: x.created_at, reverse=True)


def order_videos(videos: Iterable[Video], category: Optional[VideoCategory] = None) -> List[Video]:
    """Filter to `category` (all when None), pinned first, each group newest first."""
    picked = [v for v in videos if category is None or v.category == category]
    # stable sorts: the second key wins, ties keep the first ordering
    return sorted(newest_first(picked), key=lambda v: not v.is_pinned)


def order_posts(posts: Iterable[BlogPost]) -> List[BlogPost]:
    return newest_first(posts)


def order_testimonials(items: Iterable[Testimonial]) -> List[Testimonial]:
    """Visible testimonials before hidden ones, each group newest first."""
    return sorted(newest_first(items), key=lambda t: t.is_hidden)


def _fields_of(item: Entity) -> tuple:
    body = getattr(item, "description", None)
    if body is None:
        body = getattr(item, "content", "")
    return getattr(item, "title", ""), body


def search(items: Sequence[T], term: Optional[str]) -> List[T]:
    """Case-insensitive substring match on title plus description or content.

    A blank term returns every item unchanged.
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(items)
    return [i for i in items if any(needle in f.casefold() for f in _fields_of(i))]


def latest(items: Iterable[T], limit: int = 3) -> List[T]:
    """The `limit` newest items, as shown on the home page."""
    return newest_first(items)[:max(limit, 0)]


def related_posts(posts: Iterable[BlogPost], current_id: int, limit: int = 3) -> List[BlogPost]:
    """Newest posts other than `current_id`, for the "more insights" strip."""
    return [p for p in order_posts(posts) if p.id != current_id][:max(limit, 0)]
