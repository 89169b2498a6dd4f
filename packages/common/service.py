"""Uniform async CRUD facade over a `CollectionStore`.

Each entity kind subclasses `CrudService` and names its draft and patch
models. Input is validated here, at the boundary; the store trusts what it
receives.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from packages.schemas.base import Entity, Patch
from .errors import InvalidInputError
from .storage import CollectionStore
from .tracing import content_event

E = TypeVar("E", bound=Entity)
M = TypeVar("M", bound=BaseModel)

Payload = Union[Mapping[str, Any], BaseModel]


class CrudService(Generic[E]):
    """getAll / getById / create / update / delete for one entity kind."""

    kind: ClassVar[str]
    draft_model: ClassVar[Type[BaseModel]]
    patch_model: ClassVar[Type[Patch]]

    def __init__(self, store: CollectionStore[E]) -> None:
        self._store = store

    def _validate(self, model: Type[M], data: Payload) -> M:
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise InvalidInputError.from_validation(self.kind, e) from e

    async def get_all(self) -> List[E]:
        return await self._store.get_all()

    async def get_by_id(self, entity_id: int) -> E:
        """Raises `NotFoundError` when absent."""
        return await self._store.get_by_id(entity_id)

    async def create(self, data: Payload, *, actor_id: Optional[str] = None) -> E:
        """Validate `data` as a draft and store it.

        Raises:
            InvalidInputError: If `data` does not satisfy the draft model.
        """
        draft = self._validate(self.draft_model, data)
        record = await self._store.create(draft)
        content_event(self.kind, "created", record.id, actor_id)
        return record

    async def update(self, entity_id: int, partial: Payload, *, actor_id: Optional[str] = None) -> E:
        """Apply a partial update; unset or null fields are left unchanged.

        Raises:
            InvalidInputError: If `partial` does not satisfy the patch model.
            NotFoundError: If no record has `entity_id`.
        """
        changes = self._validate(self.patch_model, partial).changes()
        record = await self._store.update(entity_id, changes)
        content_event(self.kind, "updated", entity_id, actor_id, fields=sorted(changes))
        return record

    async def delete(self, entity_id: int, *, actor_id: Optional[str] = None) -> bool:
        """Raises `NotFoundError` when absent."""
        ok = await self._store.delete(entity_id)
        content_event(self.kind, "deleted", entity_id, actor_id)
        return ok
