"""Logging setup shared by every sales_reporting module."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "sales_reporting"

_configured = False


def configure_logging(level: int = logging.INFO) -> None:
    """Install the console handler once and set the package log level."""

    global _configured
    if not _configured:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        _configured = True
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return ``name``'s logger, configuring package logging on first use."""

    if not _configured:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
