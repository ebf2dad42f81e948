import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
import os

LOG_FILE = os.getenv("TODO_HIGHLIGHT_LOG_FILE", "todo_highlight.log")

# Names of loggers configured by setup_logger, so a later level change reaches them
_CONFIGURED: set[str] = set()


def setup_logger(name: str, log_file: str = LOG_FILE, level: str = "INFO") -> Logger:
    """
    Set up a logger with a rotating file handler. Set level via LOG_LEVEL env var or parameter.

    Handlers are attached once per logger name, so repeated calls from the same
    module reuse the existing configuration.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        log_level = os.getenv("LOG_LEVEL", level).upper()
        handler = RotatingFileHandler(log_file, maxBytes=2 * 1024 * 1024, backupCount=2, delay=True)
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, log_level, logging.INFO))
        _CONFIGURED.add(name)
    return logger


def set_log_level(level: str) -> None:
    """Apply ``level`` to every logger already created through setup_logger.

    Module loggers are set up at import time, so a level chosen later on the
    command line has to be pushed to them explicitly.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    for name in _CONFIGURED:
        logging.getLogger(name).setLevel(log_level)
