import unittest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from app.domain.errors import StoreUnavailableError
from app.infrastructure.circuit_breaker import build_store_breaker
from app.infrastructure.firestore.document_store import FirestoreRestDocumentStore

DOCUMENTS_URL = "https://firestore.test/v1/projects/demo/databases/(default)/documents"


def _response(body):
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = body
    response.raise_for_status.return_value = None
    return response


def _document(collection, doc_id, **fields):
    return {
        "name": f"projects/demo/databases/(default)/documents/{collection}/{doc_id}",
        "fields": {key: {"stringValue": value} for key, value in fields.items()},
    }


class TestFirestoreRestDocumentStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.breaker = build_store_breaker(fail_max=2, reset_timeout=60)
        self.store = FirestoreRestDocumentStore(
            project_id="demo",
            api_key="secret",
            base_url="https://firestore.test/v1/",
            page_size=2,
            breaker=self.breaker,
        )

    def _mock_client(self, mock_client_cls):
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client_cls.return_value = mock_client
        return mock_client

    @patch("httpx.AsyncClient")
    async def test_list_all_follows_page_tokens(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.get.side_effect = [
            _response(
                {
                    "documents": [_document("cars", "c1", name="A"), _document("cars", "c2", name="B")],
                    "nextPageToken": "page-2",
                }
            ),
            _response({"documents": [_document("cars", "c3", name="C")]}),
        ]

        docs = await self.store.list_all("cars")

        self.assertEqual([doc["id"] for doc in docs], ["c1", "c2", "c3"])
        self.assertEqual(docs[2]["name"], "C")
        first_call, second_call = mock_client.get.call_args_list
        self.assertEqual(first_call.args[0], f"{DOCUMENTS_URL}/cars")
        self.assertEqual(first_call.kwargs["params"], {"pageSize": 2, "key": "secret"})
        self.assertEqual(second_call.kwargs["params"], {"pageSize": 2, "pageToken": "page-2", "key": "secret"})

    @patch("httpx.AsyncClient")
    async def test_empty_collection(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.get.return_value = _response({})

        self.assertEqual(await self.store.list_all("stations"), [])

    @patch("httpx.AsyncClient")
    async def test_count_uses_aggregation_query(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.post.return_value = _response(
            [{"result": {"aggregateFields": {"count": {"integerValue": "7"}}}, "readTime": "2024-03-15T12:00:00Z"}]
        )

        total = await self.store.count("rentals", {"status": "Active"})

        self.assertEqual(total, 7)
        call = mock_client.post.call_args
        self.assertEqual(call.args[0], f"{DOCUMENTS_URL}:runAggregationQuery")
        query = call.kwargs["json"]["structuredAggregationQuery"]
        self.assertEqual(query["aggregations"], [{"alias": "count", "count": {}}])
        self.assertEqual(
            query["structuredQuery"]["where"],
            {
                "fieldFilter": {
                    "field": {"fieldPath": "status"},
                    "op": "EQUAL",
                    "value": {"stringValue": "Active"},
                }
            },
        )

    @patch("httpx.AsyncClient")
    async def test_count_with_several_filters_builds_composite_filter(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.post.return_value = _response([{"readTime": "2024-03-15T12:00:00Z"}])

        total = await self.store.count("users", {"role": "customer", "active": True})

        self.assertEqual(total, 0)
        where = mock_client.post.call_args.kwargs["json"]["structuredAggregationQuery"]["structuredQuery"]["where"]
        self.assertEqual(where["compositeFilter"]["op"], "AND")
        self.assertEqual(len(where["compositeFilter"]["filters"]), 2)

    @patch("httpx.AsyncClient")
    async def test_timeout_becomes_store_unavailable(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.get.side_effect = httpx.ReadTimeout("slow")

        with self.assertRaises(StoreUnavailableError) as ctx:
            await self.store.list_all("rentals")

        self.assertEqual(ctx.exception.collection, "rentals")
        self.assertEqual(ctx.exception.reason, "timeout")

    @patch("httpx.AsyncClient")
    async def test_http_error_status_becomes_store_unavailable(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        request = httpx.Request("GET", f"{DOCUMENTS_URL}/cars")
        response = MagicMock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "forbidden", request=request, response=httpx.Response(403, request=request)
        )
        mock_client.get.return_value = response

        with self.assertRaises(StoreUnavailableError) as ctx:
            await self.store.list_all("cars")

        self.assertEqual(ctx.exception.reason, "HTTP 403")

    @patch("httpx.AsyncClient")
    async def test_open_circuit_short_circuits_requests(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        mock_client.get.side_effect = httpx.ConnectError("refused")

        for _ in range(2):
            with self.assertRaises(StoreUnavailableError):
                await self.store.list_all("cars")
        calls_before = mock_client.get.call_count

        with self.assertRaises(StoreUnavailableError) as ctx:
            await self.store.list_all("cars")

        self.assertEqual(ctx.exception.reason, "circuit breaker open")
        self.assertEqual(mock_client.get.call_count, calls_before)

    async def _open_circuit(self, mock_client):
        mock_client.get.side_effect = httpx.ConnectError("refused")
        for _ in range(2):
            with self.assertRaises(StoreUnavailableError):
                await self.store.list_all("cars")
        self.assertEqual(self.breaker.current_state, "open")
        storage = self.breaker._state_storage
        storage.opened_at = storage.opened_at - timedelta(seconds=120)

    @patch("httpx.AsyncClient")
    async def test_failed_trial_after_reset_timeout_reopens_circuit(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        await self._open_circuit(mock_client)
        calls_before = mock_client.get.call_count

        with self.assertRaises(StoreUnavailableError):
            await self.store.list_all("cars")

        self.assertEqual(mock_client.get.call_count, calls_before + 1)
        self.assertEqual(self.breaker.current_state, "open")

        with self.assertRaises(StoreUnavailableError) as ctx:
            await self.store.list_all("cars")
        self.assertEqual(ctx.exception.reason, "circuit breaker open")
        self.assertEqual(mock_client.get.call_count, calls_before + 1)

    @patch("httpx.AsyncClient")
    async def test_successful_trial_after_reset_timeout_closes_circuit(self, mock_client_cls):
        mock_client = self._mock_client(mock_client_cls)
        await self._open_circuit(mock_client)
        mock_client.get.side_effect = None
        mock_client.get.return_value = _response({"documents": [_document("cars", "c1", name="A")]})

        docs = await self.store.list_all("cars")

        self.assertEqual([doc["id"] for doc in docs], ["c1"])
        self.assertEqual(self.breaker.current_state, "closed")
        self.assertEqual(self.breaker.fail_counter, 0)
