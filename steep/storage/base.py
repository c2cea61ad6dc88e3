"""
Storage abstraction layer.

All persistence goes through the DocumentStore interface. This allows
swapping implementations (in-memory → Firestore) without changing the
services.

Absent documents are always ``None``. Returned documents always carry
their ``id``.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any


# =============================================================================
# Storage Interface
# =============================================================================


class DocumentStore(ABC):
    """
    Collection/document storage for users, teas and brews.

    Production Implementation: Firestore
    Local Implementation: in-memory
    """

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""

    @abstractmethod
    async def query(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        """All documents whose ``field`` equals ``value``."""

    @abstractmethod
    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        """Store a new document under a generated ID, return the ID."""

    @abstractmethod
    async def set(self, collection: str, id: str, document: dict[str, Any]) -> None:
        """Create or overwrite the document at ``id``."""


class TimedDocumentStore(DocumentStore):
    """
    Bounds every call on the wrapped store.

    A hung backend call raises ``asyncio.TimeoutError`` instead of blocking
    the request forever.
    """

    def __init__(self, inner: DocumentStore, timeout: float):
        self.inner = inner
        self.timeout = timeout

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        return await asyncio.wait_for(self.inner.get(collection, id), self.timeout)

    async def query(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        return await asyncio.wait_for(self.inner.query(collection, field, value), self.timeout)

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        return await asyncio.wait_for(self.inner.add(collection, fields), self.timeout)

    async def set(self, collection: str, id: str, document: dict[str, Any]) -> None:
        await asyncio.wait_for(self.inner.set(collection, id, document), self.timeout)


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection names."""

    USERS = "users"
    TEAS = "teas"
    BREWS = "brews"
