"""Tests for coloured console logging."""

import logging

import pytest
from colorama import Fore, Style

from banis.log import ColoredFormatter, setup_logging


def make_record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("banis.test", level, __file__, 1, message, None, None)


class TestColoredFormatter:
    def test_colours_by_level(self) -> None:
        formatter = ColoredFormatter()
        assert formatter.format(make_record(logging.ERROR, "boom")) == f"{Fore.RED}boom{Style.RESET_ALL}"
        assert formatter.format(make_record(logging.WARNING, "hmm")).startswith(Fore.YELLOW)

    def test_plain_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s %(message)s", use_color=False)
        assert formatter.format(make_record(logging.INFO, "hello")) == "INFO hello"


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("banis")
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_single_handler(self) -> None:
        setup_logging()
        handler = setup_logging(verbose=True)
        logger = logging.getLogger("banis")
        assert logger.handlers == [handler]
        assert logger.level == logging.DEBUG

    def test_quiet_by_default(self) -> None:
        setup_logging()
        assert logging.getLogger("banis").level == logging.WARNING
