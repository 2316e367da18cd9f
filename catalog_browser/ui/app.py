# catalog_browser/ui/app.py

"""Terminal storefront for browsing the catalog."""

import logging
import webbrowser
from typing import Any, cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from catalog_browser.config.settings import Settings
from catalog_browser.models.catalog_item import CatalogItem
from catalog_browser.models.display_state import DisplayKind, DisplayState
from catalog_browser.services.catalog_session import CatalogSession

logger = logging.getLogger("catalog_browser.ui")

LOADING_MESSAGE = "Loading products…"
EMPTY_MESSAGE = "No products found."

# Select id -> filter field
_SELECT_FIELDS: dict[str, str] = {
    "category_select": "category",
    "size_select": "size",
    "city_select": "city",
}


class CatalogBrowserApp(App[object]):
    """Browse the catalog by search text, category, size and city."""

    CSS_PATH = "styles.css"
    TITLE = "Karachi Wear"
    SUB_TITLE = "Pakistani women's fashion"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("slash", "focus_search", "Search"),
        Binding("p", "sort_price", "Price Sort"),
        Binding("t", "sort_title", "Title Sort"),
    ]

    def __init__(self, session: CatalogSession | None = None) -> None:
        super().__init__()
        self.settings = Settings()
        self.session = session or CatalogSession.from_settings()
        self.rows: list[CatalogItem] = []
        self.status_text = ""
        self._notified_error: Exception | None = None
        self._unsubscribe: Any = None

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        criteria = self.session.criteria

        yield Header()
        yield Container(
            Static("Shop Karachi Collections", id="title"),

            Horizontal(
                Input(
                    value=criteria.text,
                    placeholder="Search lawn, kurti, abaya...",
                    id="search_input",
                ),
                Select(
                    [(c, c) for c in self.settings.CATEGORIES],
                    prompt="All Categories",
                    id="category_select",
                ),
                Select(
                    [(s, s) for s in self.settings.SIZES],
                    prompt="All Sizes",
                    id="size_select",
                ),
                Select(
                    [(c, c) for c in self.settings.CITIES],
                    value=criteria.city,
                    allow_blank=False,
                    id="city_select",
                ),
                id="filter_bar",
            ),

            Static("", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static("", id="detail"),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Set up the results table and issue the first lookup."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns("Title", "Price", "Category", "Sizes")
        self._unsubscribe = self.session.subscribe(self.render_state)
        self.session.start()
        self.render_state(self.session.display_state)

    async def on_unmount(self) -> None:
        """Stop listening and cancel any lookup still in flight."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.session.aclose()
        logger.info("Catalog browser closed")

    # ── Filter input ─────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Every edit of the search box replaces the text filter."""
        if event.input.id == "search_input":
            self.session.set_filters(text=event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Apply a category, size or city selection."""
        field_name = _SELECT_FIELDS.get(event.select.id or "")
        if field_name is None:
            return
        # The blank option carries a non-string sentinel value.
        value = event.value if isinstance(event.value, str) else ""
        if field_name == "city" and not value:
            return
        self.session.set_filters(**{field_name: value})

    # ── Rendering ────────────────────────────────────────

    def render_state(self, state: DisplayState) -> None:
        """Redraw the status line and results for ``state``."""
        if state.kind is DisplayKind.LOADING:
            self.status_text = LOADING_MESSAGE
            self.rows = []
        elif state.kind is DisplayKind.EMPTY:
            self.status_text = EMPTY_MESSAGE
            self.rows = []
        else:
            self.rows = list(state.items)
            noun = "product" if len(self.rows) == 1 else "products"
            self.status_text = f"{len(self.rows)} {noun}"

        self.query_one("#status", Static).update(self.status_text)
        self.populate_table()
        self._report_failure()

    def _report_failure(self) -> None:
        error = self.session.last_error
        if error is None or error is self._notified_error:
            return
        self._notified_error = error
        self.notify(
            "Could not load products, showing last results",
            severity="error",
        )

    def populate_table(self) -> None:
        """Fill the DataTable with the current rows."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()
        self.query_one("#detail", Static).update("")
        if not self.rows:
            return

        min_price = min(
            (i.price for i in self.rows if i.price > 0), default=0
        )
        currency = self.settings.CURRENCY

        for item in self.rows:
            is_cheapest = item.price == min_price and item.price > 0
            table.add_row(
                item.title[:60],
                Text(
                    item.format_price(currency),
                    style="bold green" if is_cheapest else "",
                ),
                item.category,
                item.sizes_label,
            )

    def on_data_table_row_highlighted(
        self, event: DataTable.RowHighlighted
    ) -> None:
        """Show description and image link of the highlighted item."""
        if not 0 <= event.cursor_row < len(self.rows):
            return
        item = self.rows[event.cursor_row]
        image = item.primary_image or "No Image"
        self.query_one("#detail", Static).update(
            f"{item.title}\n{item.description}\n{image}"
        )

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the selected item's first image in the default browser."""
        if not 0 <= event.cursor_row < len(self.rows):
            return
        image = self.rows[event.cursor_row].primary_image
        if image is None:
            self.notify("No image for this item", severity="warning")
            return
        webbrowser.open(image)

    # ── Actions ──────────────────────────────────────────

    def action_focus_search(self) -> None:
        """Move focus to the search box."""
        self.query_one("#search_input", Input).focus()

    def action_sort_price(self) -> None:
        """Sort rendered rows by price, ascending."""
        self.rows.sort(key=lambda i: i.price)
        self.populate_table()

    def action_sort_title(self) -> None:
        """Sort rendered rows by title."""
        self.rows.sort(key=lambda i: i.title.lower())
        self.populate_table()
