# catalog_browser/services/render_state.py

"""Selects what the results area should display."""

from collections.abc import Sequence

from catalog_browser.models.catalog_item import CatalogItem
from catalog_browser.models.display_state import DisplayKind, DisplayState


def select_display_state(
    loading: bool,
    items: Sequence[CatalogItem],
) -> DisplayState:
    """Map the synchronizer's ``{loading, items}`` pair to a display state.

    Loading wins over any items still held from an earlier lookup.
    """
    if loading:
        return DisplayState(DisplayKind.LOADING)
    if not items:
        return DisplayState(DisplayKind.EMPTY)
    return DisplayState(DisplayKind.POPULATED, tuple(items))
