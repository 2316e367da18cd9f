# catalog_browser/services/query_encoder.py

"""Canonical encoding of filter criteria into catalog query parameters."""

from urllib.parse import urlencode

from catalog_browser.models.fetch_cycle import CanonicalQuery
from catalog_browser.models.filter_criteria import FilterCriteria

# Parameter order is part of the encoding; equal criteria must produce
# identical queries.
QUERY_KEYS: tuple[tuple[str, str], ...] = (
    ("text", "q"),
    ("category", "category"),
    ("size", "size"),
    ("city", "city"),
)


def encode(criteria: FilterCriteria) -> CanonicalQuery:
    """Encode ``criteria`` as ordered ``(key, value)`` pairs.

    Blank fields are left out entirely rather than sent as empty
    parameters. Values are trimmed, so ``"Lawn "`` and ``"Lawn"``
    encode the same.
    """
    pairs: list[tuple[str, str]] = []
    for field_name, key in QUERY_KEYS:
        value = getattr(criteria, field_name).strip()
        if value:
            pairs.append((key, value))
    return tuple(pairs)


def to_query_string(query: CanonicalQuery) -> str:
    """Serialise ``query`` for a URL, keeping pair order."""
    return urlencode(query)
