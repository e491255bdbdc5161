import logging
from typing import Any, Mapping

import httpx
from pybreaker import CircuitBreaker

from app.application.interfaces.document_store import DocumentStore
from app.domain.errors import StoreUnavailableError
from app.infrastructure.circuit_breaker import CircuitBreakerError, call_with_breaker, store_breaker
from app.infrastructure.firestore.codec import decode_document, encode_value

logger = logging.getLogger(__name__)

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"


class FirestoreRestDocumentStore(DocumentStore):
    def __init__(
        self,
        project_id: str,
        database: str = "(default)",
        api_key: str | None = None,
        base_url: str = FIRESTORE_BASE_URL,
        timeout_seconds: float = 10.0,
        page_size: int = 300,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        """
        Read-only document store over the Firestore REST v1 API.

        Args:
            project_id: Google Cloud project hosting the database
            database: Database id, ``(default)`` for the default database
            api_key: Optional API key appended as ``key`` query parameter
            base_url: API root, overridable for the local emulator
            timeout_seconds: Per-request timeout
            page_size: Documents per page when listing a collection
            breaker: Circuit breaker guarding every request
        """
        self._documents_url = (
            f"{base_url.rstrip('/')}/projects/{project_id}/databases/{database}/documents"
        )
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._page_size = page_size
        self._breaker = breaker or store_breaker

    def _params(self, **extra: Any) -> dict[str, Any]:
        params = {key: value for key, value in extra.items() if value is not None}
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def _request(self, collection: str, send) -> Any:
        """Run ``send(client)`` under the breaker and return the decoded JSON body."""

        async def _make_request():
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await send(client)
            response.raise_for_status()
            return response.json()

        try:
            return await call_with_breaker(self._breaker, _make_request)
        except CircuitBreakerError as exc:
            logger.error(
                "Document store circuit breaker is open",
                extra={"collection": collection, "circuit_state": str(exc)},
            )
            raise StoreUnavailableError(collection, "circuit breaker open") from exc
        except httpx.TimeoutException as exc:
            logger.warning(
                "Document store request timeout",
                extra={"collection": collection, "timeout": self._timeout},
            )
            raise StoreUnavailableError(collection, "timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Document store returned an error status",
                extra={"collection": collection, "status_code": exc.response.status_code},
            )
            raise StoreUnavailableError(collection, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Document store request failed", exc_info=exc, extra={"collection": collection})
            raise StoreUnavailableError(collection, str(exc)) from exc

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        url = f"{self._documents_url}/{collection}"
        documents: list[dict[str, Any]] = []
        page_token: str | None = None

        while True:
            params = self._params(pageSize=self._page_size, pageToken=page_token)
            body = await self._request(collection, lambda client: client.get(url, params=params))
            documents.extend(decode_document(doc) for doc in body.get("documents", []))
            page_token = body.get("nextPageToken")
            if not page_token:
                return documents

    async def count(self, collection: str, filters: Mapping[str, Any] | None = None) -> int:
        structured_query: dict[str, Any] = {"from": [{"collectionId": collection}]}
        where = self._where(filters or {})
        if where:
            structured_query["where"] = where
        payload = {
            "structuredAggregationQuery": {
                "structuredQuery": structured_query,
                "aggregations": [{"alias": "count", "count": {}}],
            }
        }
        url = f"{self._documents_url}:runAggregationQuery"
        body = await self._request(
            collection, lambda client: client.post(url, params=self._params(), json=payload)
        )

        for item in body:
            result = item.get("result")
            if result:
                return int(result["aggregateFields"]["count"]["integerValue"])
        return 0

    @staticmethod
    def _where(filters: Mapping[str, Any]) -> dict[str, Any] | None:
        field_filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": "EQUAL",
                    "value": encode_value(value),
                }
            }
            for field, value in filters.items()
        ]
        if not field_filters:
            return None
        if len(field_filters) == 1:
            return field_filters[0]
        return {"compositeFilter": {"op": "AND", "filters": field_filters}}
