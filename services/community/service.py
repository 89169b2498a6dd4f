"""Service facade for learner testimonials."""

from packages.common.service import CrudService
from packages.schemas.community import Testimonial, TestimonialDraft, TestimonialPatch


class TestimonialService(CrudService[Testimonial]):
    __test__ = False

    kind = "testimonial"
    draft_model = TestimonialDraft
    patch_model = TestimonialPatch
