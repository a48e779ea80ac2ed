"""Logger level wiring for the package."""

from __future__ import annotations

import logging

from crdkit.config.models import LoggingSettings

PACKAGE_LOGGER = "crdkit"


def configure_logging(settings: LoggingSettings) -> logging.Logger:
    """Apply the configured level to the package logger; handlers are left to the caller."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.level)
    return logger
