"""Error taxonomy shared by the portal stores and service facades.

- `NotFoundError`: targeted id is absent from a collection.
- `InvalidInputError`: a draft/patch or an externally supplied value failed validation.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError


class PortalError(Exception):
    """Base class for recoverable, per-invocation portal failures."""


class NotFoundError(PortalError, LookupError):
    """Raised when getById/update/delete targets an id that does not exist."""

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class InvalidInputError(PortalError, ValueError):
    """Raised at the facade boundary when input does not satisfy the kind's schema."""

    def __init__(self, kind: str, errors: List[dict[str, Any]] | str) -> None:
        self.kind = kind
        self.errors = [{"msg": errors}] if isinstance(errors, str) else list(errors)
        msgs = "; ".join(str(e.get("msg", e)) for e in self.errors)
        super().__init__(f"invalid {kind}: {msgs}")

    @classmethod
    def from_validation(cls, kind: str, exc: ValidationError) -> "InvalidInputError":
        """Build from a pydantic `ValidationError`, keeping only JSON-safe fields."""
        return cls(kind, [
            {"loc": [str(p) for p in e["loc"]], "msg": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ])
