# tests/test_catalog_client.py

"""Tests for the CatalogClient HTTP lookup."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from catalog_browser.config.settings import Settings
from catalog_browser.services.catalog_client import CatalogClient, parse_items
from catalog_browser.services.errors import (
    CatalogError,
    MalformedResponseError,
    TransportError,
)

BASE_URL = "http://catalog.test:8000"
LAWN_QUERY = (("category", "Lawn"), ("city", "Karachi"))


def _response(body: Any, status: int = 200) -> MagicMock:
    """Fake curl_cffi response with a JSON (or raw string) body."""
    resp = MagicMock()
    resp.status_code = status
    resp.text = body if isinstance(body, str) else json.dumps(body)
    return resp


def _client(resp: MagicMock | None = None) -> tuple[CatalogClient, MagicMock]:
    session = MagicMock()
    if resp is not None:
        session.get.return_value = resp
    return CatalogClient(BASE_URL, timeout=5, session=session), session


class TestBuildUrl(unittest.TestCase):
    """URL construction from canonical queries."""

    def test_url_with_query(self) -> None:
        client, _ = _client()
        self.assertEqual(
            client.build_url(LAWN_QUERY),
            "http://catalog.test:8000/api/products"
            "?category=Lawn&city=Karachi",
        )

    def test_url_without_query(self) -> None:
        client, _ = _client()
        self.assertEqual(
            client.build_url(()), "http://catalog.test:8000/api/products"
        )

    def test_trailing_slash_stripped(self) -> None:
        client = CatalogClient(BASE_URL + "/", session=MagicMock())
        self.assertTrue(
            client.build_url(()).startswith(BASE_URL + "/api/")
        )

    def test_default_timeout_from_settings(self) -> None:
        client = CatalogClient(BASE_URL, session=MagicMock())
        self.assertEqual(client.timeout, Settings.REQUEST_TIMEOUT)

    @patch("catalog_browser.services.catalog_client.curl_requests.Session")
    def test_session_created_when_not_given(
        self, mock_session_cls: MagicMock,
    ) -> None:
        client = CatalogClient(BASE_URL)
        mock_session_cls.assert_called_once_with(
            impersonate=Settings.IMPERSONATE_BROWSER
        )
        self.assertIs(client.session, mock_session_cls.return_value)


class TestLookup(unittest.TestCase):
    """CatalogClient.lookup success and failure paths."""

    def test_returns_items_in_provider_order(self) -> None:
        body = {
            "items": [
                {"_id": "b", "title": "Chiffon Formal", "price": 22000},
                {"_id": "a", "title": "Printed Lawn", "price": 4500},
            ]
        }
        client, session = _client(_response(body))
        items = client.lookup(LAWN_QUERY)
        self.assertEqual([i.id for i in items], ["b", "a"])
        session.get.assert_called_once_with(
            client.build_url(LAWN_QUERY),
            headers=Settings.DEFAULT_HEADERS,
            timeout=5,
        )

    def test_missing_items_is_empty(self) -> None:
        client, _ = _client(_response({"total": 0}))
        self.assertEqual(client.lookup(LAWN_QUERY), [])

    def test_null_items_is_empty(self) -> None:
        client, _ = _client(_response({"items": None}))
        self.assertEqual(client.lookup(LAWN_QUERY), [])

    def test_invalid_items_dropped(self) -> None:
        body = {
            "items": [
                {"_id": "1", "title": "", "price": 100},
                {"_id": "2", "title": "Kurti", "price": 2500},
            ]
        }
        client, _ = _client(_response(body))
        self.assertEqual([i.id for i in client.lookup(())], ["2"])

    def test_nan_price_dropped(self) -> None:
        """The JSON decoder accepts NaN and Infinity tokens."""
        body = (
            '{"items": [{"_id": "1", "title": "Lawn", "price": NaN},'
            ' {"_id": "2", "title": "Pret", "price": Infinity},'
            ' {"_id": "3", "title": "Kurti", "price": 2500}]}'
        )
        client, _ = _client(_response(body))
        self.assertEqual([i.id for i in client.lookup(())], ["3"])

    def test_http_error_is_transport_error(self) -> None:
        client, _ = _client(_response({"error": "boom"}, status=502))
        with self.assertRaises(TransportError) as ctx:
            client.lookup(LAWN_QUERY)
        self.assertIn("502", str(ctx.exception))

    def test_connection_failure_is_transport_error(self) -> None:
        client, session = _client()
        session.get.side_effect = ConnectionError("refused")
        with self.assertRaises(TransportError) as ctx:
            client.lookup(LAWN_QUERY)
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)

    def test_invalid_json_is_malformed(self) -> None:
        client, _ = _client(_response("<html>oops</html>"))
        with self.assertRaises(MalformedResponseError):
            client.lookup(LAWN_QUERY)

    def test_wrong_shape_is_malformed(self) -> None:
        for body in ([], {"items": "none"}, {"items": [1, 2]}):
            with self.subTest(body=body):
                client, _ = _client(_response(body))
                with self.assertRaises(MalformedResponseError):
                    client.lookup(LAWN_QUERY)

    def test_errors_share_a_base(self) -> None:
        self.assertTrue(issubclass(TransportError, CatalogError))
        self.assertTrue(issubclass(MalformedResponseError, CatalogError))

    def test_close_closes_session(self) -> None:
        client, session = _client()
        client.close()
        session.close.assert_called_once_with()


class TestParseItems(unittest.TestCase):
    """parse_items on already-decoded bodies."""

    def test_non_object_body(self) -> None:
        with self.assertRaises(MalformedResponseError):
            parse_items("items")


class TestFetch(unittest.IsolatedAsyncioTestCase):
    """CatalogClient.fetch runs the blocking lookup off the loop."""

    async def test_fetch_returns_lookup_result(self) -> None:
        body = {"items": [{"_id": "x", "title": "Abaya", "price": 7000}]}
        client, _ = _client(_response(body))
        items = await client.fetch((("category", "Abaya"),))
        self.assertEqual([i.title for i in items], ["Abaya"])

    async def test_fetch_propagates_catalog_errors(self) -> None:
        client, _ = _client(_response({}, status=500))
        with self.assertRaises(TransportError):
            await client.fetch(LAWN_QUERY)


if __name__ == "__main__":
    unittest.main()
