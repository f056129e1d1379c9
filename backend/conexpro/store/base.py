"""Persistence port: the document store contract the services depend on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

Record = dict[str, Any]
Listener = Callable[[list[Record]], None]
Unsubscribe = Callable[[], None]


class DocumentStore(Protocol):
    """Async document store holding named collections of JSON records.

    Records are plain JSON-compatible dicts keyed by an opaque string id.
    Implementations raise :class:`~conexpro.exceptions.StoreError` when the
    backing storage fails, leaving the collection as it was, and
    :class:`~conexpro.exceptions.RecordNotFoundError` when ``update``
    targets a missing record.
    """

    async def set(self, collection: str, record_id: str, data: Record) -> None:
        """Create or replace a record."""
        ...

    async def update(self, collection: str, record_id: str, fields: Record) -> None:
        """Merge ``fields`` into an existing record."""
        ...

    async def delete(self, collection: str, record_id: str) -> None:
        """Remove a record; deleting a missing id is a no-op."""
        ...

    async def get(self, collection: str, record_id: str) -> Record | None: ...

    async def list_all(self, collection: str) -> list[Record]: ...

    def subscribe(self, collection: str, listener: Listener) -> Unsubscribe:
        """Observe a collection.

        ``listener`` is called with the full record list right away and
        after every change to the collection.
        """
        ...
