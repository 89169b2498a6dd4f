"""Viewer identity helpers for FastAPI endpoints.

Identity and session management live outside this service; the caller supplies
the current viewer role and user id as request headers and they are trusted as
given.

Provides:
- `Viewer` Pydantic model for the current viewer
- `get_viewer` FastAPI dependency reading `X-Viewer-Role` / `X-User-Id`
"""

from typing import Optional

from fastapi import Header
from pydantic import BaseModel

from .roles import Role, parse_role


class Viewer(BaseModel):
    """The viewer a request is rendered for."""
    user_id: Optional[str] = None
    role: Role = Role.FREE

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def get_viewer(
    x_viewer_role: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
) -> Viewer:
    """FastAPI dependency to build the current `Viewer` from request headers.

    A missing role header means an anonymous viewer (`free`).

    Raises:
        InvalidInputError: If the role header names an unknown role.
    """
    return Viewer(user_id=x_user_id or None, role=parse_role(x_viewer_role))
