# catalog_browser/config/logging_config.py

"""Per-run timestamped logging for catalog_browser.

Every launch writes to its own file under ``logs/`` named after the
launch time (``logs/run_20261019_153045.log``). All
``catalog_browser.*`` loggers propagate into it, so fetch cycles, stale
responses and lookup failures from every module end up in one place.

The stderr handler is optional: while the Textual UI owns the terminal
anything written to stderr would tear the screen, so the app entry
point switches it off.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from catalog_browser.config.settings import Settings

ROOT_LOGGER_NAME = "catalog_browser"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    logs_dir: Path | None = None,
    console: bool = True,
) -> Path:
    """Attach the per-run file handler to the ``catalog_browser`` logger.

    Args:
        logs_dir: Directory for the run log. Defaults to
            ``Settings.LOGS_DIR``.
        console: Also echo WARNING+ records to stderr.

    Returns:
        Path of the log file for this run. Repeated calls keep the
        handlers installed by the first call.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / (
        f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    )

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(
            logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging ready (catalog=%s), writing to %s",
        Settings.API_BASE_URL,
        log_file,
    )
    return log_file
