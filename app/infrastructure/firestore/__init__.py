"""Firestore REST adapter."""

from app.infrastructure.firestore.codec import StoreTimestamp, decode_document
from app.infrastructure.firestore.document_store import FirestoreRestDocumentStore

__all__ = [
    "FirestoreRestDocumentStore",
    "StoreTimestamp",
    "decode_document",
]
