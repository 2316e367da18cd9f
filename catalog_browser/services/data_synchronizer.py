# catalog_browser/services/data_synchronizer.py

"""Keeps the visible catalog result set in step with the latest query."""

import asyncio
import logging
from collections.abc import Callable

from catalog_browser.config.settings import Settings
from catalog_browser.models.catalog_item import CatalogItem
from catalog_browser.models.fetch_cycle import CanonicalQuery, FetchCycle
from catalog_browser.services.catalog_client import CatalogProvider
from catalog_browser.services.errors import CatalogError

logger = logging.getLogger("catalog_browser.sync")

StateObserver = Callable[[], None]


class DataSynchronizer:
    """Drives the fetch lifecycle for a stream of canonical queries.

    Each distinct query starts a :class:`FetchCycle` tagged with a
    monotonically increasing sequence number. Only the cycle holding
    the latest number may touch the visible ``{loading, items}`` pair;
    anything that resolves after being superseded is recorded on its
    own cycle and otherwise ignored. In-flight provider calls are not
    cancelled.

    ``debounce`` (seconds) delays each lookup; a cycle superseded while
    waiting never reaches the provider.
    """

    def __init__(
        self,
        provider: CatalogProvider,
        debounce: float | None = None,
    ) -> None:
        self._provider = provider
        self._debounce = (
            Settings.DEBOUNCE_SECONDS if debounce is None else debounce
        )
        self._seq = 0
        self._last_query: CanonicalQuery | None = None
        self._current: FetchCycle | None = None
        self._loading = False
        self._items: tuple[CatalogItem, ...] = ()
        self._last_error: Exception | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._observers: list[StateObserver] = []

    # ── Read-only state ──────────────────────────────────

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        return self._items

    @property
    def last_error(self) -> Exception | None:
        """Failure of the most recent active cycle, if it failed."""
        return self._last_error

    @property
    def current_cycle(self) -> FetchCycle | None:
        return self._current

    @property
    def last_query(self) -> CanonicalQuery | None:
        return self._last_query

    # ── Observers ────────────────────────────────────────

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Call ``observer`` after every change of ``{loading, items}``."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer()
            except Exception:
                logger.error(
                    "Synchronizer observer %r failed",
                    observer,
                    exc_info=True,
                )

    # ── Fetch lifecycle ──────────────────────────────────

    def observe(
        self, query: CanonicalQuery,
    ) -> asyncio.Task[None] | None:
        """Start a fetch cycle for ``query`` unless it is a repeat.

        Must be called from inside a running event loop. Returns the
        lookup task, or ``None`` when ``query`` equals the query most
        recently observed.
        """
        if query == self._last_query:
            logger.debug("Query unchanged, no new fetch: %s", query)
            return None

        loop = asyncio.get_running_loop()

        self._seq += 1
        cycle = FetchCycle(seq=self._seq, query=query)
        self._last_query = query
        self._current = cycle
        self._loading = True
        logger.info("Fetch cycle #%d started for %s", cycle.seq, query)
        self._notify()

        task = loop.create_task(
            self._run(cycle), name=f"catalog-fetch-{cycle.seq}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_active(self, cycle: FetchCycle) -> bool:
        return cycle.seq == self._seq

    async def _run(self, cycle: FetchCycle) -> None:
        if self._debounce > 0:
            await asyncio.sleep(self._debounce)
            if not self._is_active(cycle):
                logger.debug(
                    "Fetch cycle #%d superseded during debounce, "
                    "lookup skipped",
                    cycle.seq,
                )
                return

        try:
            items = await self._provider.fetch(cycle.query)
        except CatalogError as exc:
            cycle.fail(exc)
            self._apply_failure(cycle, exc)
            return
        except Exception as exc:
            cycle.fail(exc)
            logger.error(
                "Unexpected error in fetch cycle #%d for %s",
                cycle.seq,
                cycle.query,
                exc_info=exc,
            )
            self._apply_failure(cycle, exc)
            return

        cycle.succeed(items or [])
        self._apply_success(cycle)

    def _apply_success(self, cycle: FetchCycle) -> None:
        if not self._is_active(cycle):
            logger.debug(
                "Discarding stale result of cycle #%d (%d items); "
                "latest is #%d",
                cycle.seq,
                len(cycle.items),
                self._seq,
            )
            return
        self._loading = False
        self._items = cycle.items
        self._last_error = None
        logger.info(
            "Fetch cycle #%d resolved with %d items",
            cycle.seq,
            len(cycle.items),
        )
        self._notify()

    def _apply_failure(self, cycle: FetchCycle, exc: Exception) -> None:
        if not self._is_active(cycle):
            logger.debug(
                "Discarding stale failure of cycle #%d: %s; "
                "latest is #%d",
                cycle.seq,
                exc,
                self._seq,
            )
            return
        self._loading = False
        self._last_error = exc
        logger.error(
            "Fetch cycle #%d for %s failed (%s): %s",
            cycle.seq,
            cycle.query,
            type(exc).__name__,
            exc,
        )
        self._notify()

    # ── Shutdown / test support ──────────────────────────

    async def wait_idle(self) -> None:
        """Wait until every outstanding lookup task has finished."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding lookup tasks and wait for them to unwind.

        A cycle cancelled here stays PENDING but no longer counts as
        loading; the visible items are left as they were.
        """
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._loading = False
        logger.debug("Synchronizer closed (%d tasks cancelled)", len(tasks))
