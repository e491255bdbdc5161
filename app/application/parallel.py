"""
Fan-out explícito para lecturas en paralelo.

Política elegida: fail-fast. Todas las lecturas se lanzan a la vez; la
primera que falla cancela a las pendientes y su excepción se propaga. No hay
modo de resultados parciales ni reintentos: eso queda en manos de quien llama.
"""

import asyncio
from typing import Any, Awaitable

from app.application.interfaces.document_store import DocumentStore


async def gather_fail_fast(*aws: Awaitable[Any]) -> list[Any]:
    """
    Espera todas las corrutinas y retorna sus resultados en el orden recibido.

    Raises:
        La excepción de la primera tarea fallida (en orden de argumentos),
        después de cancelar las tareas que seguían pendientes.
    """
    if not aws:
        return []

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    failures = [
        task.exception() for task in tasks if task.done() and not task.cancelled()
    ]
    for failure in failures:
        if failure is not None:
            raise failure
    return [task.result() for task in tasks]


async def fetch_collections(store: DocumentStore, *collections: str) -> list[list[dict[str, Any]]]:
    """Lee varias colecciones completas en paralelo con semántica fail-fast."""
    return await gather_fail_fast(*(store.list_all(name) for name in collections))
