# grocery/utils/logging.py
import logging
import os

from rich.logging import RichHandler

from grocery.utils.settings import LOG_LEVEL


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Logger z RichHandlerem, jeden handler na nazwe.
    DEBUG w env wymusza poziom debug.
    """
    logger = logging.getLogger(name or "grocery")
    level = logging.DEBUG if os.getenv("DEBUG") else logging.getLevelName(LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("[%(name)s]  %(message)s"))
        handler.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
