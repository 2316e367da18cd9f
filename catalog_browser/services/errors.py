# catalog_browser/services/errors.py

"""Failures reported by a catalog lookup."""


class CatalogError(Exception):
    """Base class for catalog lookup failures."""


class TransportError(CatalogError):
    """The lookup could not be completed (connection, timeout, HTTP status)."""


class MalformedResponseError(CatalogError):
    """The response body did not have the expected shape."""
