# catalog_browser/services/catalog_session.py

"""Wires the filter store, query encoder and synchronizer together."""

import asyncio
import logging
from collections.abc import Callable

from catalog_browser.config.settings import Settings
from catalog_browser.models.display_state import DisplayState
from catalog_browser.models.fetch_cycle import CanonicalQuery
from catalog_browser.models.filter_criteria import FilterCriteria
from catalog_browser.services.catalog_client import (
    CatalogClient,
    CatalogProvider,
)
from catalog_browser.services.data_synchronizer import DataSynchronizer
from catalog_browser.services.filter_store import FilterStore
from catalog_browser.services.query_encoder import encode
from catalog_browser.services.render_state import select_display_state

logger = logging.getLogger("catalog_browser.session")

DisplayObserver = Callable[[DisplayState], None]


class CatalogSession:
    """What the presentation layer talks to.

    Every filter change is encoded and handed to the synchronizer;
    every synchronizer change is turned into a :class:`DisplayState`
    and pushed to subscribers.
    """

    def __init__(
        self,
        provider: CatalogProvider,
        initial: FilterCriteria | None = None,
        debounce: float | None = None,
    ) -> None:
        self.store = FilterStore(initial)
        self.synchronizer = DataSynchronizer(provider, debounce=debounce)
        self._client: CatalogClient | None = None
        self._query: CanonicalQuery = encode(self.store.get())
        self._observers: list[DisplayObserver] = []
        self._unsubscribers = [
            self.store.subscribe(self._on_criteria_changed),
            self.synchronizer.subscribe(self._on_sync_changed),
        ]

    @classmethod
    def from_settings(
        cls, initial: FilterCriteria | None = None,
    ) -> "CatalogSession":
        """Session backed by a :class:`CatalogClient` for the configured endpoint."""
        client = CatalogClient(
            Settings.API_BASE_URL, timeout=Settings.REQUEST_TIMEOUT
        )
        session = cls(client, initial, debounce=Settings.DEBOUNCE_SECONDS)
        session._client = client
        return session

    # ── Rendering sink ───────────────────────────────────

    @property
    def criteria(self) -> FilterCriteria:
        return self.store.get()

    @property
    def query(self) -> CanonicalQuery:
        return self._query

    @property
    def display_state(self) -> DisplayState:
        return select_display_state(
            self.synchronizer.loading, self.synchronizer.items
        )

    @property
    def last_error(self) -> Exception | None:
        return self.synchronizer.last_error

    def subscribe(self, observer: DisplayObserver) -> Callable[[], None]:
        """Call ``observer`` with the new display state on every change."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ── Commands ─────────────────────────────────────────

    def start(self) -> asyncio.Task[None] | None:
        """Issue the lookup for the initial criteria."""
        logger.info("Session starting with %s", self.criteria)
        return self.synchronizer.observe(self._query)

    def set_filters(self, **patch: str) -> None:
        """Replace one or more filter fields."""
        self.store.set(**patch)

    async def aclose(self) -> None:
        """Detach observers, cancel in-flight lookups, close the client."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        await self.synchronizer.aclose()
        if self._client is not None:
            self._client.close()
            self._client = None

    # ── Internal wiring ──────────────────────────────────

    def _on_criteria_changed(self, criteria: FilterCriteria) -> None:
        self._query = encode(criteria)
        self.synchronizer.observe(self._query)

    def _on_sync_changed(self) -> None:
        state = self.display_state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.error(
                    "Display observer %r failed", observer, exc_info=True
                )
