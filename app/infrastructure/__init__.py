"""
Capa de Infraestructura - Analítica de rentas.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Document store SQL y configuración de base de datos
- firestore/: Cliente REST de Firestore y decodificación de documentos
- in_memory/: Implementaciones in-memory para testing
- circuit_breaker: Protección de las llamadas al almacén remoto
"""

from app.infrastructure.circuit_breaker import build_store_breaker, call_with_breaker
from app.infrastructure.db.repositories.document_store_sql import DocumentStoreSQL
from app.infrastructure.firestore import FirestoreRestDocumentStore
from app.infrastructure.in_memory import InMemoryDocumentStore

__all__ = [
    # Stores
    "DocumentStoreSQL",
    "FirestoreRestDocumentStore",
    "InMemoryDocumentStore",
    # Resilience
    "build_store_breaker",
    "call_with_breaker",
]
