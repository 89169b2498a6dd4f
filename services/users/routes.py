# services/users/routes.py
"""Admin dashboard endpoints: account list, role reassignment and counts."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from packages.common.auth import Viewer
from packages.common.rbac import require_admin
from packages.common.roles import Role, role_label
from packages.schemas.users import User
from services.portal.container import Container, get_container
from .stats import DashboardStats, dashboard_stats

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=List[User])
async def list_users(c: Container = Depends(get_container)) -> List[User]:
    return await c.users.get_all()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> User:
    return await c.users.create(payload, actor_id=admin.user_id)


@router.patch("/users/{user_id}/role", response_model=User)
async def change_role(
    user_id: int,
    payload: Dict[str, Any] = Body(...),
    admin: Viewer = Depends(require_admin),
    c: Container = Depends(get_container),
) -> User:
    return await c.users.set_role(user_id, payload.get("role"), actor_id=admin.user_id)


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, admin: Viewer = Depends(require_admin), c: Container = Depends(get_container)) -> Dict[str, bool]:
    return {"ok": await c.users.delete(user_id, actor_id=admin.user_id)}


@router.get("/stats", response_model=DashboardStats)
async def read_stats(c: Container = Depends(get_container)) -> DashboardStats:
    return dashboard_stats(
        await c.users.get_all(),
        await c.videos.get_all(),
        await c.posts.get_all(),
        await c.testimonials.get_all(),
    )


@router.get("/roles")
async def list_roles() -> List[Dict[str, str]]:
    """Role options for the role picker, in tier order."""
    return [{"value": r.value, "label": role_label(r)} for r in Role]
