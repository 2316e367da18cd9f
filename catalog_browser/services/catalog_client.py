# catalog_browser/services/catalog_client.py

"""HTTP client for the remote catalog service's product listing API."""

import asyncio
import json
import logging
import time
from typing import Any, Protocol

from curl_cffi import requests as curl_requests

from catalog_browser.config.settings import Settings
from catalog_browser.filters.item_validator import ItemValidator
from catalog_browser.models.catalog_item import CatalogItem
from catalog_browser.models.fetch_cycle import CanonicalQuery
from catalog_browser.services.errors import (
    MalformedResponseError,
    TransportError,
)
from catalog_browser.services.query_encoder import to_query_string

logger = logging.getLogger("catalog_browser.client")


class CatalogProvider(Protocol):
    """Anything that can resolve a canonical query to catalog items."""

    async def fetch(self, query: CanonicalQuery) -> list[CatalogItem]:
        """Resolve ``query``; raise a ``CatalogError`` on failure."""
        ...


def parse_items(payload: Any) -> list[CatalogItem]:
    """Turn a decoded response body into validated catalog items.

    A missing or null ``items`` field means zero items.

    Raises:
        MalformedResponseError: The body is not an object, ``items`` is
            not a list, or an entry cannot be read as an item.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Response body must be an object, got {type(payload).__name__}"
        )
    raw_items = payload.get("items")
    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise MalformedResponseError(
            f"'items' must be a list, got {type(raw_items).__name__}"
        )
    items = [CatalogItem.from_dict(raw) for raw in raw_items]
    valid, _dropped = ItemValidator.validate(items)
    return valid


class CatalogClient:
    """Queries ``GET {base_url}/api/products`` with canonical parameters.

    The blocking curl_cffi request runs in a worker thread so awaiting
    :meth:`fetch` never stalls the event loop. There is no retry or
    backoff; one failed request is one failed lookup.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        session: curl_requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.settings = Settings()
        self.timeout = (
            timeout if timeout is not None
            else self.settings.REQUEST_TIMEOUT
        )
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def build_url(self, query: CanonicalQuery) -> str:
        """Full lookup URL for ``query``."""
        url = f"{self.base_url}{self.settings.PRODUCTS_PATH}"
        encoded = to_query_string(query)
        return f"{url}?{encoded}" if encoded else url

    def lookup(self, query: CanonicalQuery) -> list[CatalogItem]:
        """Blocking lookup of ``query``.

        Raises:
            TransportError: Connection failure, timeout, or non-2xx.
            MalformedResponseError: Body is not the expected JSON shape.
        """
        url = self.build_url(query)
        start = time.monotonic()
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.timeout,
            )
        except Exception as exc:
            raise TransportError(
                f"GET {url} failed: {exc}"
            ) from exc

        elapsed_ms = (time.monotonic() - start) * 1000
        if not 200 <= resp.status_code < 300:
            raise TransportError(
                f"GET {url} returned HTTP {resp.status_code}"
            )

        try:
            payload = json.loads(resp.text)
        except ValueError as exc:
            raise MalformedResponseError(
                f"GET {url} returned invalid JSON: {exc}"
            ) from exc

        items = parse_items(payload)
        logger.info(
            "Catalog lookup %s -> %d items (%.0fms)",
            url,
            len(items),
            elapsed_ms,
        )
        return items

    async def fetch(self, query: CanonicalQuery) -> list[CatalogItem]:
        """Run :meth:`lookup` in a worker thread."""
        return await asyncio.to_thread(self.lookup, query)

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
