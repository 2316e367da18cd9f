# catalog_browser/models/filter_criteria.py

"""Shopper-controlled filter criteria."""

from dataclasses import dataclass, fields

from catalog_browser.config.settings import Settings


@dataclass(frozen=True)
class FilterCriteria:
    """The constraint set a shopper narrows the catalog with.

    An empty string means "no constraint" for ``text``, ``category``
    and ``size``. ``city`` always names a city.
    """

    text: str = ""
    category: str = ""
    size: str = ""
    city: str = Settings.DEFAULT_CITY

    def __post_init__(self) -> None:
        if not self.city.strip():
            raise ValueError("city cannot be blank")

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Field names in declaration order."""
        return tuple(f.name for f in fields(cls))
