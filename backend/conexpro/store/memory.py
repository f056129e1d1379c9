"""In-memory document store."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from conexpro.exceptions import RecordNotFoundError

if TYPE_CHECKING:
    from conexpro.store.base import Listener, Record, Unsubscribe

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Document store backed by dicts, for tests and single-process use.

    Records are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, initial: dict[str, dict[str, Record]] | None = None) -> None:
        self._collections: dict[str, dict[str, Record]] = copy.deepcopy(initial or {})
        self._listeners: dict[str, list[Listener]] = {}

    async def set(self, collection: str, record_id: str, data: Record) -> None:
        records = dict(self._collections.get(collection, {}))
        records[record_id] = copy.deepcopy(data)
        self._commit(collection, records)

    async def update(self, collection: str, record_id: str, fields: Record) -> None:
        records = self._collections.get(collection, {})
        if record_id not in records:
            raise RecordNotFoundError(collection, record_id)
        updated = dict(records)
        updated[record_id] = {**records[record_id], **copy.deepcopy(fields)}
        self._commit(collection, updated)

    async def delete(self, collection: str, record_id: str) -> None:
        records = self._collections.get(collection, {})
        if record_id in records:
            remaining = {key: value for key, value in records.items() if key != record_id}
            self._commit(collection, remaining)

    async def get(self, collection: str, record_id: str) -> Record | None:
        record = self._collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def list_all(self, collection: str) -> list[Record]:
        return self._snapshot(collection)

    def subscribe(self, collection: str, listener: Listener) -> Unsubscribe:
        listeners = self._listeners.setdefault(collection, [])
        listeners.append(listener)
        listener(self._snapshot(collection))

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _snapshot(self, collection: str) -> list[Record]:
        return copy.deepcopy(list(self._collections.get(collection, {}).values()))

    def _commit(self, collection: str, records: dict[str, Record]) -> None:
        """Swap in the new records, persist, then notify listeners.

        A failed persist restores the previous records and notifies no one.
        """
        previous = self._collections.get(collection)
        self._collections[collection] = records
        try:
            self._persist()
        except Exception:
            if previous is None:
                del self._collections[collection]
            else:
                self._collections[collection] = previous
            raise

        listeners = self._listeners.get(collection)
        if not listeners:
            return
        snapshot = self._snapshot(collection)
        for listener in list(listeners):
            try:
                listener(copy.deepcopy(snapshot))
            except Exception:
                logger.exception("Store listener for '%s' failed", collection)

    def _persist(self) -> None:
        """Hook for subclasses that write through to durable storage."""
