"""
Firestore-backed document store.

Requires the ``firestore`` extra (google-cloud-firestore). Credentials are
resolved by the Google client library (GOOGLE_APPLICATION_CREDENTIALS or the
ambient service account).
"""

from __future__ import annotations

from typing import Any

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from steep.config import Settings
from steep.storage.base import DocumentStore


class FirestoreDocumentStore(DocumentStore):
    """DocumentStore over ``firestore.AsyncClient``."""

    def __init__(self, client: firestore.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> FirestoreDocumentStore:
        project = settings.firestore_project or None
        return cls(firestore.AsyncClient(project=project))

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        snapshot = await self.client.collection(collection).document(id).get()
        if not snapshot.exists:
            return None
        return {**(snapshot.to_dict() or {}), "id": snapshot.id}

    async def query(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        query = self.client.collection(collection).where(filter=FieldFilter(field, "==", value))
        return [
            {**(snapshot.to_dict() or {}), "id": snapshot.id}
            async for snapshot in query.stream()
        ]

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        _, reference = await self.client.collection(collection).add(fields)
        return reference.id

    async def set(self, collection: str, id: str, document: dict[str, Any]) -> None:
        fields = {key: value for key, value in document.items() if key != "id"}
        await self.client.collection(collection).document(id).set(fields)
