"""Service facade for portal accounts."""

from typing import Optional

from packages.common.errors import InvalidInputError
from packages.common.roles import Role
from packages.common.service import CrudService
from packages.schemas.users import User, UserDraft, UserPatch


class UserService(CrudService[User]):
    kind = "user"
    draft_model = UserDraft
    patch_model = UserPatch

    async def set_role(self, user_id: int, role: "Role | str | None", *, actor_id: Optional[str] = None) -> User:
        """Reassign a user's membership tier.

        Raises:
            InvalidInputError: If `role` is missing or not a known role.
            NotFoundError: If the user does not exist.
        """
        if role is None:
            raise InvalidInputError(self.kind, "role is required")
        return await self.update(user_id, {"role": role}, actor_id=actor_id)
