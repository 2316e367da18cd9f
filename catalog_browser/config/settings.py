# catalog_browser/config/settings.py

"""Central configuration for the catalog_browser client."""

import logging
import math
import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("catalog_browser.config")


def _env_float(name: str, default: float) -> float:
    """Read a non-negative float from the environment.

    Anything that is not a finite non-negative number is logged and
    replaced by ``default``.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(
            "Ignoring %s=%r: not a number, using %s", name, raw, default
        )
        return default
    if not math.isfinite(value) or value < 0:
        logger.warning(
            "Ignoring %s=%r: must be a finite non-negative number, "
            "using %s",
            name,
            raw,
            default,
        )
        return default
    return value


class Settings:
    """Central configuration for the catalog_browser client.

    Environment-backed values are read once, when this module is first
    imported. Nothing re-reads them afterwards.
    """

    # --- Catalog service ---
    API_BASE_URL: str = os.getenv(
        "CATALOG_BACKEND_URL", "http://localhost:8000"
    ).rstrip("/")
    PRODUCTS_PATH: str = "/api/products"
    REQUEST_TIMEOUT: float = _env_float("CATALOG_REQUEST_TIMEOUT", 15.0)

    # --- Synchronisation ---
    DEBOUNCE_SECONDS: float = _env_float("CATALOG_DEBOUNCE_SECONDS", 0.0)

    # --- HTTP client ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Catalog vocabulary ---
    CURRENCY: str = "PKR"
    DEFAULT_CITY: str = "Karachi"
    CITIES: list[str] = ["Karachi", "Lahore", "Islamabad"]
    CATEGORIES: list[str] = ["Lawn", "Pret", "Abaya", "Kurti", "Formal"]
    SIZES: list[str] = ["XS", "S", "M", "L", "XL", "Free"]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
