# tests/conftest.py

"""Shared pytest fixtures for the catalog_browser test suite."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from catalog_browser.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path) -> Generator[None, None, None]:
    """Point log output at a temp dir and drop handlers afterwards."""
    with patch.object(Settings, "LOGS_DIR", tmp_path / "logs"):
        yield
    root_logger = logging.getLogger("catalog_browser")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
