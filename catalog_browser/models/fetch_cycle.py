# catalog_browser/models/fetch_cycle.py

"""Bookkeeping for one remote catalog lookup."""

from dataclasses import dataclass
from enum import Enum

from catalog_browser.models.catalog_item import CatalogItem

CanonicalQuery = tuple[tuple[str, str], ...]


class FetchStatus(Enum):
    """Lifecycle of a lookup."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FetchCycle:
    """One lookup, tagged with the query and sequence number that started it."""

    seq: int
    query: CanonicalQuery
    status: FetchStatus = FetchStatus.PENDING
    items: tuple[CatalogItem, ...] = ()
    error: Exception | None = None

    def succeed(self, items: list[CatalogItem]) -> None:
        self.status = FetchStatus.SUCCEEDED
        self.items = tuple(items)

    def fail(self, error: Exception) -> None:
        self.status = FetchStatus.FAILED
        self.error = error
