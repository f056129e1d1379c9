"""Document store port and implementations."""

from conexpro.store.base import DocumentStore, Listener, Record, Unsubscribe
from conexpro.store.json_file import JsonFileDocumentStore
from conexpro.store.memory import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "Listener",
    "Record",
    "Unsubscribe",
]
