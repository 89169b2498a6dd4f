"""Community schemas for testimonials and their moderation state."""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, StringConstraints, field_validator

from .base import Entity, Patch

MAX_TESTIMONIAL_LENGTH = 500

TestimonialText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_TESTIMONIAL_LENGTH)
]


class TestimonialDraft(BaseModel):
    """A learner's testimonial; `user_id` is a copied reference to the author."""
    __test__ = False

    user_id: str
    content: TestimonialText
    is_hidden: bool = False

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class Testimonial(TestimonialDraft, Entity):
    """A stored testimonial."""


class TestimonialPatch(Patch):
    """Authors may change the text; moderators toggle `is_hidden`."""
    __test__ = False

    content: Optional[TestimonialText] = None
    is_hidden: Optional[bool] = None
