# catalog_browser/filters/item_validator.py

"""Drop catalog items that cannot be rendered."""

import logging
import math

from catalog_browser.models.catalog_item import CatalogItem

logger = logging.getLogger("catalog_browser.filters")


class ItemValidator:
    """Validate items returned by the catalog service."""

    @staticmethod
    def validate(
        items: list[CatalogItem],
    ) -> tuple[list[CatalogItem], int]:
        """Drop items with blank titles or negative or non-finite prices.

        A price of zero is kept; the catalog is currency-agnostic and
        free items are legal. Provider order is preserved.

        Returns the valid items and the count of dropped ones.
        """
        valid: list[CatalogItem] = []
        dropped = 0

        for item in items:
            if not item.title.strip():
                logger.debug(
                    "Dropped item with empty title (id=%s)", item.id
                )
                dropped += 1
                continue
            if not math.isfinite(item.price) or item.price < 0:
                logger.debug(
                    "Dropped item with invalid price "
                    "(id=%s, title=%s, price=%s)",
                    item.id,
                    item.title,
                    item.price,
                )
                dropped += 1
                continue
            valid.append(item)

        if dropped:
            logger.info(
                "Validation dropped %d of %d catalog items",
                dropped,
                len(items),
            )

        return valid, dropped
