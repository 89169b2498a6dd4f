"""RBAC utilities for the portal.

Provides:
- `can_access(viewer_role, allowed_roles)`: per-item visibility decision
- `require_roles(*roles)` / `require_admin`: FastAPI dependencies gating admin actions
"""

from typing import Callable, Iterable

from fastapi import Depends, HTTPException, status

from .auth import Viewer, get_viewer
from .roles import Role

__all__ = ["Role", "can_access", "require_roles", "require_admin"]


def can_access(viewer_role: Role, allowed_roles: Iterable[Role]) -> bool:
    """Return True when a viewer with `viewer_role` may see an item.

    Admins see everything; `both` viewers see anything open to `member` or
    `master`; every other role needs an exact match in `allowed_roles`.
    """
    allowed = set(allowed_roles)
    if viewer_role is Role.ADMIN:
        return True
    if viewer_role in allowed:
        return True
    if viewer_role is Role.BOTH:
        return Role.MEMBER in allowed or Role.MASTER in allowed
    return False


def require_roles(*required: Role) -> Callable[[Viewer], Viewer]:
    """Create a dependency that lets the request through for any of `required`.

    Returns:
        A FastAPI dependency callable that:
          - receives the current `Viewer` (via `Depends(get_viewer)`)
          - raises 403 if the viewer's role is not among `required`
          - otherwise returns the `Viewer`
    """
    def wrapper(viewer: Viewer = Depends(get_viewer)) -> Viewer:
        """Validate the current viewer's role against the required set."""
        if viewer.role not in required:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return viewer

    return wrapper


require_admin = require_roles(Role.ADMIN)
