# catalog_browser/models/display_state.py

"""Rendering-facing summary of the synchronised catalog view."""

from dataclasses import dataclass
from enum import Enum

from catalog_browser.models.catalog_item import CatalogItem


class DisplayKind(Enum):
    """What the results area should show."""

    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"


@dataclass(frozen=True)
class DisplayState:
    """Derived display state; ``items`` is only non-empty when populated."""

    kind: DisplayKind
    items: tuple[CatalogItem, ...] = ()

    @property
    def is_loading(self) -> bool:
        return self.kind is DisplayKind.LOADING
