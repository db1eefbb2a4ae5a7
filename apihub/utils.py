"""Logging helpers used by apihub.

The package logger is safe for library consumption: nothing is attached to
it until the application calls :func:`init_log`.
"""

import logging
import os

logger = logging.getLogger("apihub")
logger.addHandler(logging.NullHandler())

# mirrors Go's log.Llongfile|log.LstdFlags
LOG_FORMAT = '%(asctime)s %(pathname)s:%(lineno)d: %(message)s'
DATE_FORMAT = '%Y/%m/%d %H:%M:%S'


def init_log(file_path: str, verbose: bool = False) -> logging.Logger:
    """Attach an append-only file handler to the package logger.

    Raises OSError when the log file cannot be opened.
    """
    handler = logging.FileHandler(file_path, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def close_log():
    for h in list(logger.handlers):
        if isinstance(h, logging.FileHandler):
            logger.removeHandler(h)
            h.close()


def dir_exists(path: str) -> bool:
    return bool(path) and os.path.isdir(path)
