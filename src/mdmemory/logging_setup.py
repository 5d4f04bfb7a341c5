"""Logging initialization for the CLI"""

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    """Attach a single stderr handler to the mdmemory logger. Safe to call repeatedly."""
    logger = logging.getLogger("mdmemory")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if getattr(setup_logging, "_configured", False):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    setup_logging._configured = True  # type: ignore[attr-defined]
