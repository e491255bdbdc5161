"""Interface DocumentStore - Puerto de lectura sobre el document store remoto."""

from typing import Any, Mapping

from app.domain.constants import COLLECTION_STATIONS


class DocumentStore:
    """
    Acceso de solo lectura a colecciones completas del store.

    Las implementaciones deben traducir cualquier falla de transporte a
    ``StoreUnavailableError`` para que la agregación falle de forma uniforme.
    """

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        """
        Lee todos los documentos de una colección.

        Returns:
            Lista de dicts con la clave ``id`` más los campos del documento,
            en el orden natural del store.
        """
        raise NotImplementedError

    async def count(self, collection: str, filters: Mapping[str, Any] | None = None) -> int:
        """
        Cuenta documentos de una colección.

        Args:
            collection: Nombre de la colección.
            filters: Igualdades campo == valor, combinadas con AND.
        """
        raise NotImplementedError

    async def ping(self) -> bool:
        """Verifica que el store responde. Por defecto cuenta una colección pequeña."""
        await self.count(COLLECTION_STATIONS)
        return True
