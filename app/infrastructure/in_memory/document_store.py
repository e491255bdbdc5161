"""Implementación in-memory del document store."""

import copy
from typing import Any, Iterable, Mapping
from uuid import uuid4

from app.application.interfaces.document_store import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """
    Document store en memoria para testing y demos.

    Conserva el orden de inserción y devuelve copias, así los llamadores
    no pueden mutar el estado almacenado.
    """

    def __init__(self, collections: Mapping[str, Iterable[Mapping[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {}
        for name, docs in (collections or {}).items():
            for doc in docs:
                self.add(name, doc)

    def add(self, collection: str, doc: Mapping[str, Any]) -> str:
        """Agrega un documento; genera un id si no trae uno."""
        stored = dict(doc)
        stored["id"] = str(stored.get("id") or uuid4().hex)
        self._collections.setdefault(collection, []).append(stored)
        return stored["id"]

    def clear(self) -> None:
        self._collections.clear()

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._collections.get(collection, []))

    async def count(self, collection: str, filters: Mapping[str, Any] | None = None) -> int:
        docs = self._collections.get(collection, [])
        if not filters:
            return len(docs)
        return sum(
            1
            for doc in docs
            if all(field in doc and doc[field] == value for field, value in filters.items())
        )
