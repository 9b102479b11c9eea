import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
MAX_BYTES = 256 * 1024
BACKUP_COUNT = 3


def setup_logging(path: Union[str, Path], level: str = "WARNING") -> logging.Logger:
    """Send the ``uika`` loggers to a rotating file.

    The terminal belongs to curses while the UI runs, so nothing is logged to
    a stream. If the file cannot be opened, logging is silenced instead.
    """
    logger = logging.getLogger("uika")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    log_path = Path(path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    except OSError:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    return logger
