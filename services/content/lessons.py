"""Lesson helpers for the video player.

A video's `curriculum_urls` is its lesson list; the position in the list is
the lesson number (zero-based here, shown one-based).
"""

import re
from typing import Optional

from packages.schemas.content import Video

_YOUTUBE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")
_VIMEO = re.compile(r"vimeo\.com/(\d+)")


def lesson_at(video: Video, index: int) -> Optional[str]:
    """URL of lesson `index`, falling back to the first lesson; None if there are none."""
    urls = video.curriculum_urls
    if not urls:
        return None
    if 0 <= index < len(urls):
        return urls[index]
    return urls[0]


def youtube_id(url: str) -> Optional[str]:
    m = _YOUTUBE.search(url)
    return m.group(1) if m else None


def embed_url(url: Optional[str]) -> Optional[str]:
    """Turn a YouTube/Vimeo page URL into its player URL; other URLs pass through."""
    if not url:
        return None
    vid = youtube_id(url)
    if vid:
        return f"https://www.youtube.com/embed/{vid}"
    m = _VIMEO.search(url)
    if m:
        return f"https://player.vimeo.com/video/{m.group(1)}"
    return url


def lesson_thumbnail(url: str) -> Optional[str]:
    vid = youtube_id(url)
    return f"https://img.youtube.com/vi/{vid}/mqdefault.jpg" if vid else None
