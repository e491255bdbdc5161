"""Implementación SQL del document store sobre una tabla JSON."""

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping
from uuid import uuid4

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.document_store import DocumentStore
from app.domain.errors import StoreUnavailableError
from app.infrastructure.db.engine import session_scope
from app.infrastructure.db.tables import documents

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_field_equals(field: str, value: Any):
    element = documents.c.data[field]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


class DocumentStoreSQL(DocumentStore):
    """
    Document store respaldado por SQLAlchemy.

    Cada lectura abre su propia sesión, así las lecturas en paralelo del
    agregador no comparten conexión.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        """Lee todos los documentos de la colección en orden de inserción."""
        stmt = (
            select(documents.c.doc_id, documents.c.data)
            .where(documents.c.collection == collection)
            .order_by(documents.c.id)
        )
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            logger.error("Document store query failed", exc_info=exc, extra={"collection": collection})
            raise StoreUnavailableError(collection, str(exc)) from exc
        return [self._row_to_document(row) for row in rows]

    async def count(self, collection: str, filters: Mapping[str, Any] | None = None) -> int:
        """Cuenta documentos aplicando igualdades sobre campos del JSON."""
        stmt = select(func.count()).select_from(documents).where(documents.c.collection == collection)
        for field, value in (filters or {}).items():
            stmt = stmt.where(_json_field_equals(field, value))
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return int(result.scalar_one())
        except SQLAlchemyError as exc:
            logger.error("Document store count failed", exc_info=exc, extra={"collection": collection})
            raise StoreUnavailableError(collection, str(exc)) from exc

    async def insert_many(self, collection: str, docs: Iterable[Mapping[str, Any]]) -> list[str]:
        """
        Inserta documentos (carga inicial / pruebas). Fechas y Decimal se
        guardan como cadenas ISO / decimales.
        """
        rows = []
        for doc in docs:
            data = dict(doc)
            doc_id = str(data.pop("id", None) or uuid4().hex)
            rows.append(
                {
                    "collection": collection,
                    "doc_id": doc_id,
                    "data": json.loads(json.dumps(data, default=_json_default)),
                }
            )
        if not rows:
            return []

        async with session_scope(self._session_maker) as session:
            await session.execute(insert(documents), rows)
        return [row["doc_id"] for row in rows]

    def _row_to_document(self, row) -> dict[str, Any]:
        """Convierte una fila de DB a documento ``{"id": ..., **campos}``."""
        return {**row["data"], "id": row["doc_id"]}
