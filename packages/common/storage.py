"""In-memory collection store for the portal.

One `CollectionStore` instance owns the authoritative list for one entity
kind. Stores are constructed explicitly at start-up and handed to the service
facades; nothing here is module-level state.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from packages.schemas.base import Entity
from .errors import NotFoundError

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

# Assigned by the store, never taken from drafts or patches.
PROTECTED_FIELDS = frozenset({"id", "created_at"})


def next_id(records: Sequence[Entity]) -> int:
    """Return an id greater than every id in `records` (1 for an empty collection)."""
    return max((r.id for r in records), default=0) + 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionStore(Generic[E]):
    """Authoritative in-memory list of one entity kind with async CRUD.

    Every operation may first suspend for the configured latency; the read or
    mutation that follows never yields, so a read-modify-write is never
    interleaved with another operation. Returned records are deep copies.
    """

    def __init__(
        self,
        kind: str,
        model: Type[E],
        records: Iterable[E] = (),
        *,
        latency: float = 0.0,
        normalize: Optional[Callable[[E], E]] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Create a store.

        Args:
            kind: Entity kind name used in errors and logs (e.g. "video").
            model: Pydantic entity model stored in this collection.
            records: Initial records, newest first.
            latency: Seconds to wait before each operation.
            normalize: Kind-specific hook applied to a record on create and update.
            clock: Source of `created_at` timestamps.
        """
        self.kind = kind
        self._model = model
        self._latency = latency
        self._normalize = normalize
        self._clock = clock
        self._items: List[E] = []
        self._last_id = 0
        self.reset(records)

    def reset(self, records: Iterable[E]) -> None:
        """Replace the whole collection, e.g. when re-seeding."""
        self._items = [r.model_copy(deep=True) for r in records]
        self._last_id = next_id(self._items) - 1

    def __len__(self) -> int:
        return len(self._items)

    async def _pause(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    def _index(self, entity_id: int) -> int:
        for i, r in enumerate(self._items):
            if r.id == entity_id:
                return i
        raise NotFoundError(self.kind, entity_id)

    async def get_all(self) -> List[E]:
        """Return copies of every record, newest first."""
        await self._pause()
        return [r.model_copy(deep=True) for r in self._items]

    async def get_by_id(self, entity_id: int) -> E:
        """Return a copy of the record with `entity_id`.

        Raises:
            NotFoundError: If no record has that id.
        """
        await self._pause()
        return self._items[self._index(entity_id)].model_copy(deep=True)

    async def create(self, draft: BaseModel) -> E:
        """Store a new record built from `draft` and return a copy of it.

        The id is allocated above every id this store has issued, `created_at`
        is stamped from the clock, and the record is prepended.
        """
        await self._pause()
        new_id = max(next_id(self._items), self._last_id + 1)
        data = {k: v for k, v in draft.model_dump().items() if k not in PROTECTED_FIELDS}
        record = self._model.model_validate({**data, "id": new_id, "created_at": self._clock()})
        if self._normalize:
            record = self._normalize(record)
        self._items.insert(0, record)
        self._last_id = new_id
        log.debug("created %s %s", self.kind, new_id)
        return record.model_copy(deep=True)

    async def update(self, entity_id: int, changes: Mapping[str, Any]) -> E:
        """Shallow-merge `changes` over the stored record and return a copy.

        Fields absent from `changes` are preserved; `id` and `created_at`
        are ignored if present.

        Raises:
            NotFoundError: If no record has that id.
        """
        await self._pause()
        idx = self._index(entity_id)
        update = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        record = self._items[idx].model_copy(update=update, deep=True)
        if self._normalize:
            record = self._normalize(record)
        self._items[idx] = record
        log.debug("updated %s %s fields=%s", self.kind, entity_id, sorted(update))
        return record.model_copy(deep=True)

    async def delete(self, entity_id: int) -> bool:
        """Remove the record with `entity_id`; other collections are untouched.

        Raises:
            NotFoundError: If no record has that id.
        """
        await self._pause()
        del self._items[self._index(entity_id)]
        log.debug("deleted %s %s", self.kind, entity_id)
        return True
