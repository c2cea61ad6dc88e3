"""
Storage abstractions.

Integration Points:
- DocumentStore → Firestore (users, teas, brews)
"""

from steep.storage.base import Collections, DocumentStore, TimedDocumentStore
from steep.storage.local import InMemoryDocumentStore, create_store

__all__ = [
    "Collections",
    "DocumentStore",
    "InMemoryDocumentStore",
    "TimedDocumentStore",
    "create_store",
]
