"""Logging setup shared by all modules."""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_ROOT_NAME = "colorstats"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the package namespace.

    The package root logger gets a single stream handler the first time
    any module asks for a logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False

    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def set_level(level: str):
    """Set the package log level from a name like "DEBUG"."""
    logger = get_logger(_ROOT_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
