# catalog_browser/services/filter_store.py

"""Owner of the current filter criteria."""

import dataclasses
import logging
from collections.abc import Callable

from catalog_browser.models.filter_criteria import FilterCriteria

logger = logging.getLogger("catalog_browser.store")

CriteriaObserver = Callable[[FilterCriteria], None]


class FilterStore:
    """Single mutation point for :class:`FilterCriteria`.

    Observers are called synchronously, in subscription order, after
    every :meth:`set`, including calls that leave the criteria
    unchanged. Deciding whether a change matters is left to them.
    """

    def __init__(self, initial: FilterCriteria | None = None) -> None:
        self._criteria = initial or FilterCriteria()
        self._observers: list[CriteriaObserver] = []

    def get(self) -> FilterCriteria:
        """Return the current criteria."""
        return self._criteria

    def set(self, **patch: str) -> None:
        """Merge ``patch`` over the current criteria and notify observers.

        Raises:
            TypeError: Unknown field name or non-string value.
            ValueError: ``city`` patched to a blank string.
        """
        known = FilterCriteria.field_names()
        for name, value in patch.items():
            if name not in known:
                raise TypeError(f"Unknown filter field '{name}'")
            if not isinstance(value, str):
                raise TypeError(
                    f"Filter field '{name}' must be a string, "
                    f"got {type(value).__name__}"
                )
        if "city" in patch and not patch["city"].strip():
            raise ValueError("city cannot be blank")

        self._criteria = dataclasses.replace(self._criteria, **patch)
        logger.debug("Filters set %s -> %s", patch, self._criteria)

        for observer in list(self._observers):
            observer(self._criteria)

    def subscribe(self, observer: CriteriaObserver) -> Callable[[], None]:
        """Register ``observer``; the returned callable unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
