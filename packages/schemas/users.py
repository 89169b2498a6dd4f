"""User schemas: portal accounts and their membership tier."""

from typing import Optional

from pydantic import BaseModel, EmailStr

from packages.common.roles import Role
from .base import Entity, Patch


class UserDraft(BaseModel):
    """Payload for registering an account."""
    email: EmailStr
    role: Role = Role.FREE


class User(UserDraft, Entity):
    """A stored account."""


class UserPatch(Patch):
    """Only the role of an account is reassignable."""
    role: Optional[Role] = None
