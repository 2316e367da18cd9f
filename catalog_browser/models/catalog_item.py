# catalog_browser/models/catalog_item.py

"""Catalog item model as served by the remote catalog service."""

from dataclasses import dataclass, field
from typing import Any

from catalog_browser.services.errors import MalformedResponseError


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise MalformedResponseError(
            f"Item field '{field_name}' must be a list, "
            f"got {type(value).__name__}"
        )
    return [str(v) for v in value]


@dataclass(frozen=True)
class CatalogItem:
    """A single read-only listing from the catalog service."""

    id: str
    title: str
    price: float
    description: str = ""
    images: tuple[str, ...] = ()
    category: str = ""
    sizes: frozenset[str] = field(default_factory=frozenset)
    # Catalog order of ``sizes``; the set itself is unordered.
    size_order: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def from_dict(cls, raw: Any) -> "CatalogItem":
        """Build an item from one entry of the ``items`` array.

        The service's document id arrives as ``_id``; plain ``id`` is
        accepted as a fallback.

        Raises:
            MalformedResponseError: ``raw`` is not an object, the price
                is not numeric, or a list field has the wrong type.
        """
        if not isinstance(raw, dict):
            raise MalformedResponseError(
                f"Item must be an object, got {type(raw).__name__}"
            )

        price_raw = raw.get("price", 0)
        if isinstance(price_raw, bool):
            raise MalformedResponseError("Item price must be numeric")
        try:
            price = float(price_raw)
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(
                f"Item price must be numeric, got {price_raw!r}"
            ) from exc

        sizes = _as_str_list(raw.get("sizes"), "sizes")
        return cls(
            id=_as_str(raw.get("_id", raw.get("id"))),
            title=_as_str(raw.get("title")),
            price=price,
            description=_as_str(raw.get("description")),
            images=tuple(_as_str_list(raw.get("images"), "images")),
            category=_as_str(raw.get("category")),
            sizes=frozenset(sizes),
            size_order=tuple(dict.fromkeys(sizes)),
        )

    @property
    def primary_image(self) -> str | None:
        """First image URL, or ``None`` when the item has no images."""
        return self.images[0] if self.images else None

    @property
    def sizes_label(self) -> str:
        """Sizes joined in catalog order, e.g. ``"S, M, L"``."""
        ordered = self.size_order or tuple(sorted(self.sizes))
        return ", ".join(ordered)

    def format_price(self, currency: str) -> str:
        """Render the price with thousands separators, e.g. ``PKR 12,500``."""
        if self.price.is_integer():
            return f"{currency} {int(self.price):,}"
        return f"{currency} {self.price:,.2f}"
