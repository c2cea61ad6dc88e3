"""
Local storage implementation for development and tests.

Works without any external services.
"""

from __future__ import annotations

import copy
from typing import Any

from steep.config import Settings
from steep.core.utils import generate_id
from steep.storage.base import DocumentStore, TimedDocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory document storage. Reads and writes are copied."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        document = self._data.get(collection, {}).get(id)
        if document is None:
            return None
        return {**copy.deepcopy(document), "id": id}

    async def query(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        return [
            {**copy.deepcopy(document), "id": id}
            for id, document in self._data.get(collection, {}).items()
            if field in document and document[field] == value
        ]

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        id = generate_id()
        await self.set(collection, id, fields)
        return id

    async def set(self, collection: str, id: str, document: dict[str, Any]) -> None:
        stored = copy.deepcopy(document)
        stored.pop("id", None)
        self._data.setdefault(collection, {})[id] = stored


# =============================================================================
# Factory
# =============================================================================


def create_store(settings: Settings) -> DocumentStore:
    """Create the configured store, bounded by the store timeout."""
    if settings.store_backend == "memory":
        inner: DocumentStore = InMemoryDocumentStore()
    elif settings.store_backend == "firestore":
        from steep.storage.firestore import FirestoreDocumentStore

        inner = FirestoreDocumentStore.from_settings(settings)
    else:
        raise ValueError(f"Unknown store backend: {settings.store_backend}")

    return TimedDocumentStore(inner, settings.store_timeout_seconds)
