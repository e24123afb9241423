"""
Tests for logger setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

from routemethod.utils.logger import get_logger, setup_logger


def test_setup_logger_writes_file(tmp_path: Path) -> None:
    """A log file (and its directory) is created and receives records."""
    log_file = tmp_path / "logs" / "app.log"
    log = setup_logger("routemethod.test_file", level=logging.DEBUG, log_file=log_file)
    log.debug("itinerary received")
    for h in log.handlers:
        h.flush()
    assert "itinerary received" in log_file.read_text(encoding="utf-8")
    for h in list(log.handlers):
        h.close()
        log.removeHandler(h)


def test_setup_logger_is_idempotent() -> None:
    """Calling again adjusts the level without stacking handlers."""
    name = "routemethod.test_idempotent"
    first = setup_logger(name, level=logging.INFO)
    second = setup_logger(name, level=logging.WARNING)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING
    assert get_logger(name) is second
