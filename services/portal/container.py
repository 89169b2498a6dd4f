"""Service container for the portal.

`build_container` is called once at application start-up. It creates one
`CollectionStore` per entity kind, fills it from the seed dataset and wires the
facades. Routes reach the facades only through `get_container`.
"""

from dataclasses import dataclass
import logging
from typing import Optional

from fastapi import Request

from packages.common.config import Settings, get_settings
from packages.common.seed import SeedData, load_seed
from packages.common.storage import CollectionStore
from packages.schemas.community import Testimonial
from packages.schemas.content import BlogPost, Video, derive_excerpt
from packages.schemas.users import User
from services.community.service import TestimonialService
from services.content.service import BlogService, VideoService
from services.users.service import UserService

log = logging.getLogger(__name__)


@dataclass
class Container:
    """The four facades presentation code is allowed to call."""
    videos: VideoService
    posts: BlogService
    testimonials: TestimonialService
    users: UserService


def build_container(settings: Optional[Settings] = None, seed: Optional[SeedData] = None) -> Container:
    """Create fresh stores and facades.

    Args:
        settings: Application settings; defaults to `get_settings()`.
        seed: Initial dataset. When omitted it is read from `settings.SEED_PATH`
            if `SEED_ON_START` is set, otherwise the stores start empty.

    Returns:
        A new, fully wired `Container`.
    """
    s = settings or get_settings()
    if seed is None:
        seed = load_seed(s.SEED_PATH) if s.SEED_ON_START else SeedData()
    latency = s.latency_seconds

    container = Container(
        videos=VideoService(CollectionStore("video", Video, seed.videos, latency=latency)),
        posts=BlogService(
            CollectionStore("post", BlogPost, seed.posts, latency=latency, normalize=derive_excerpt)
        ),
        testimonials=TestimonialService(
            CollectionStore("testimonial", Testimonial, seed.testimonials, latency=latency)
        ),
        users=UserService(CollectionStore("user", User, seed.users, latency=latency)),
    )
    log.info("container ready (latency=%.3fs)", latency)
    return container


def get_container(request: Request) -> Container:
    """FastAPI dependency returning the container built for this app."""
    return request.app.state.container
