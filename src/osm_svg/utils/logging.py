"""Logger helpers shared by the converter modules."""

from __future__ import annotations

import logging
import sys

_PACKAGE_LOGGER = "osm_svg"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = _PACKAGE_LOGGER) -> logging.Logger:
    """Return a logger below the package namespace."""

    if name != _PACKAGE_LOGGER and not name.startswith(_PACKAGE_LOGGER + "."):
        name = f"{_PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Only the command line entry point calls this.  Library code merely emits
    records and leaves handler configuration to the application.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "get_logger"]
