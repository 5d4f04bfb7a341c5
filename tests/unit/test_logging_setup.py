"""Unit tests for logging_setup.py"""

import logging

from mdmemory.logging_setup import setup_logging


def test_setup_logging_sets_level_and_single_handler():
    logger = logging.getLogger("mdmemory")
    setup_logging("info")
    setup_logging("DEBUG")
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, logging.StreamHandler) for h in logger.handlers) == 1


def test_setup_logging_unknown_level_falls_back_to_warning():
    setup_logging("chatty")
    assert logging.getLogger("mdmemory").level == logging.WARNING
