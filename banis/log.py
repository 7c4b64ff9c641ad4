# banis/log.py
import logging
import sys

from colorama import Fore, Style

LEVEL_COLORS = {
    logging.DEBUG: Style.DIM + Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Style.BRIGHT + Fore.RED,
}


class ColoredFormatter(logging.Formatter):
    """Colours whole log lines by level, the same palette the reader UI uses."""

    def __init__(self, fmt: str = "%(message)s", use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        return f"{LEVEL_COLORS.get(record.levelno, '')}{message}{Style.RESET_ALL}"


def setup_logging(verbose: bool = False) -> logging.Handler:
    """Install a single coloured stderr handler on the package logger."""

    logger = logging.getLogger("banis")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s"
    handler.setFormatter(ColoredFormatter(fmt, use_color=sys.stderr.isatty()))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
