"""Closed role enumeration shared by schemas, auth and RBAC."""

from enum import Enum

from .errors import InvalidInputError


class Role(str, Enum):
    """Membership tier of a viewer, or a tier permitted on a content item."""

    FREE = "free"
    MEMBER = "member"
    MASTER = "master"
    BOTH = "both"
    ADMIN = "admin"


_LABELS = {
    Role.FREE: "Free",
    Role.MEMBER: "Member",
    Role.MASTER: "Master",
    Role.BOTH: "Member + Master",
    Role.ADMIN: "Administrator",
}


def parse_role(value: "str | Role | None") -> Role:
    """Resolve an externally supplied role value.

    `None` or a blank string means an anonymous viewer and resolves to `free`.
    Anything outside the closed enumeration is rejected rather than defaulted.

    Raises:
        InvalidInputError: If `value` is not one of the five role names.
    """
    if isinstance(value, Role):
        return value
    if value is None or not value.strip():
        return Role.FREE
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise InvalidInputError("role", f"unknown role {value!r}") from None


def role_label(role: Role) -> str:
    """Human-readable label for a role badge."""
    return _LABELS[role]
