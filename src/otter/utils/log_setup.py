"""Logging setup for the ``otter`` logger hierarchy."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from otter.sdk.models import LogSettings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: LogSettings, *, verbose: bool = False) -> logging.Logger:
    """Attach handlers to the ``otter`` logger according to *settings*.

    Replaces handlers installed by an earlier call. ``verbose`` forces DEBUG.
    """
    logger = logging.getLogger("otter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if verbose else getattr(logging, settings.level.upper())
    logger.setLevel(level)
    formatter = logging.Formatter(_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.file:
        file_handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_size_mb * 1024 * 1024,
            backupCount=settings.max_backups,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
