"""Tests for logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from otter.sdk.models import LogSettings
from otter.utils.log_setup import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    logger = logging.getLogger("otter")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


class TestConfigureLogging:
    def test_level_from_settings(self) -> None:
        logger = configure_logging(LogSettings(level="warning"))
        assert logger.name == "otter"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_verbose_forces_debug(self) -> None:
        assert configure_logging(LogSettings(level="error"), verbose=True).level == logging.DEBUG

    def test_rotating_file(self, tmp_path: Path) -> None:
        path = tmp_path / "otter.log"
        logger = configure_logging(LogSettings(file=str(path), max_size_mb=2, max_backups=4))
        [file_handler] = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert file_handler.maxBytes == 2 * 1024 * 1024
        assert file_handler.backupCount == 4

        logging.getLogger("otter.core.interface.client").error("upstream down")
        file_handler.flush()
        assert "upstream down" in path.read_text(encoding="utf-8")

    def test_repeated_calls_replace_handlers(self, tmp_path: Path) -> None:
        settings = LogSettings(file=str(tmp_path / "a.log"))
        configure_logging(settings)
        logger = configure_logging(settings)
        assert len(logger.handlers) == 2
