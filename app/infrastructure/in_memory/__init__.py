"""Implementaciones in-memory para testing."""

from app.infrastructure.in_memory.document_store import InMemoryDocumentStore

__all__ = [
    "InMemoryDocumentStore",
]
