"""Shared building blocks for portal entity schemas."""

from datetime import datetime, timezone
from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, StringConstraints, field_validator

from packages.common.roles import Role


def _allowed_roles(roles: List[Role]) -> List[Role]:
    seen: list[Role] = []
    for r in roles:
        if r not in seen:
            seen.append(r)
    if not seen:
        raise ValueError("at least one role must be allowed")
    return seen


# Allowed-roles set: non-empty, first occurrence of each role kept in order.
AllowedRoles = Annotated[List[Role], AfterValidator(_allowed_roles)]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]

DEFAULT_THUMBNAIL = (
    "https://images.unsplash.com/photo-1516321318423-f06f85e504b3"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=1200&q=80"
)


class Entity(BaseModel):
    """A stored record: identity and creation time are assigned by the store."""
    id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # naive timestamps are UTC
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)


class Patch(BaseModel):
    """Partial update; only fields explicitly set to a non-null value apply."""

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
