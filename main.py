# main.py

"""Entry point for the catalog_browser terminal storefront."""

import logging

from catalog_browser.config.logging_config import setup_logging
from catalog_browser.config.settings import Settings

logger = logging.getLogger("catalog_browser.main")


def main() -> None:
    """Configure logging and run the Textual app until the user quits."""
    log_file = setup_logging(console=False)
    logger.info(
        "catalog_browser starting (catalog=%s, log file: %s)",
        Settings.API_BASE_URL,
        log_file,
    )

    from catalog_browser.ui.app import CatalogBrowserApp

    try:
        app = CatalogBrowserApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("catalog_browser shutting down")


if __name__ == "__main__":
    main()
