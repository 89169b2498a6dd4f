# services/community/moderation.py
"""Moderation rules for the Community service.

- `is_owner`: authorship check used to allow editing a testimonial.
- `can_edit` / `can_moderate`: what the current viewer may do with a testimonial.
- `toggle_visibility`: hide a visible testimonial or show a hidden one.
"""

from typing import Optional

from packages.common.auth import Viewer
from packages.schemas.community import Testimonial
from .service import TestimonialService


def is_owner(testimonial: Testimonial, user_id: Optional[str]) -> bool:
    """True when `user_id` is the testimonial's author (compared by value)."""
    return user_id is not None and testimonial.user_id == str(user_id)


def can_edit(viewer: Viewer, testimonial: Testimonial) -> bool:
    """Only the author may change a testimonial's text."""
    return is_owner(testimonial, viewer.user_id)


def can_moderate(viewer: Viewer) -> bool:
    """Admins may hide, show and delete any testimonial."""
    return viewer.is_admin


async def toggle_visibility(service: TestimonialService, testimonial_id: int, *, actor_id: Optional[str] = None) -> Testimonial:
    """Flip `is_hidden` and return the updated testimonial.

    Raises:
        NotFoundError: If the testimonial does not exist.
    """
    current = await service.get_by_id(testimonial_id)
    return await service.update(testimonial_id, {"is_hidden": not current.is_hidden}, actor_id=actor_id)
