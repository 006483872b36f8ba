"""Logging setup shared by the library and the GUI.

Usage:
    from creatorhub.utils.logger import get_logger
    logger = get_logger(__name__)

The root logger is configured once, on first use, from CH_LOG_LEVEL.
"""
import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL = os.getenv("CH_LOG_LEVEL", "INFO").upper()

# HTTP stack loggers that flood DEBUG output with connection details
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def setup_logging(level: str = DEFAULT_LEVEL, verbose: bool = False) -> None:
    """Configure the root logger; ``verbose`` forces DEBUG including HTTP chatter."""
    resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
