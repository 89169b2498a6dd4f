# services/community/routes.py
"""Testimonial endpoints.

- GET    /testimonials: every testimonial, visible first, with per-viewer permissions
- POST   /testimonials: post a testimonial as the current user
- PATCH  /testimonials/{id}: author edits the text
- POST   /testimonials/{id}/visibility: admin hides or shows
- DELETE /testimonials/{id}: admin removes
"""

from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel

from packages.common.auth import Viewer, get_viewer
from packages.common.ordering import order_testimonials
from packages.common.rbac import require_admin
from packages.schemas.community import Testimonial
from services.portal.container import Container, get_container
from services.users.stats import visible_testimonials
from .moderation import can_edit, can_moderate, toggle_visibility

router = APIRouter(tags=["testimonials"])


class TestimonialView(BaseModel):
    """A testimonial plus what the current viewer may do with it."""
    id: int
    user_id: str
    content: str
    is_hidden: bool
    created_at: datetime
    can_edit: bool
    can_moderate: bool


def _view(t: Testimonial, viewer: Viewer) -> TestimonialView:
    return TestimonialView(**t.model_dump(), can_edit=can_edit(viewer, t), can_moderate=can_moderate(viewer))


@router.get("/testimonials", response_model=List[TestimonialView])
async def list_testimonials(viewer: Viewer = Depends(get_viewer), c: Container = Depends(get_container)) -> List[TestimonialView]:
    return [_view(t, viewer) for t in order_testimonials(await c.testimonials.get_all())]


@router.get("/testimonials/stats")
async def testimonials_stats(c: Container = Depends(get_container)) -> Dict[str, int]:
    items = await c.testimonials.get_all()
    return {"total": len(items), "visible": visible_testimonials(items)}


@router.post("/testimonials", response_model=Testimonial, status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    payload: Dict[str, Any] = Body(...),
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> Testimonial:
    """Post as the current user; authorship comes from the viewer, never the body."""
    if not viewer.user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user identity")
    draft = {"content": payload.get("content"), "user_id": viewer.user_id, "is_hidden": False}
    return await c.testimonials.create(draft, actor_id=viewer.user_id)


@router.patch("/testimonials/{testimonial_id}", response_model=Testimonial)
async def update_testimonial(
    testimonial_id: int,
    payload: Dict[str, Any] = Body(...),
    viewer: Viewer = Depends(get_viewer),
    c: Container = Depends(get_container),
) -> Testimonial:
    current = await c.testimonials.get_by_id(testimonial_id)
    if not can_edit(viewer, current):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the author may edit")
    return await c.testimonials.update(testimonial_id, {"content": payload.get("content")}, actor_id=viewer.user_id)


@router.post("/testimonials/{testimonial_id}/visibility", response_model=Testimonial)
async def toggle_testimonial(
    testimonial_id: int,
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> Testimonial:
    return await toggle_visibility(c.testimonials, testimonial_id, actor_id=admin.user_id)


@router.delete("/testimonials/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: int,
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> Dict[str, bool]:
    return {"ok": await c.testimonials.delete(testimonial_id, actor_id=admin.user_id)}
