"""Debug log files for codemap runs (``codemap --log``)."""

import logging
import os
from datetime import datetime

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(log_dir: str = ".codemap/logs", level: int = logging.DEBUG) -> logging.Logger:
    """
    Attach a timestamped file handler to the ``codemap`` logger.

    Every module logs through ``logging.getLogger(__name__)``, so a single
    handler on the package logger captures the whole run.  Calling this
    again for the same directory reuses the handler already attached.
    """
    target = os.path.abspath(log_dir)
    os.makedirs(target, exist_ok=True)

    logger = logging.getLogger("codemap")
    logger.setLevel(level)

    for handler in logger.handlers:
        if (isinstance(handler, logging.FileHandler)
                and os.path.dirname(handler.baseFilename) == target):
            return logger

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    fh = logging.FileHandler(os.path.join(target, f"codemap_{stamp}.log"), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(fh)
    logger.debug("Logging to %s", fh.baseFilename)
    return logger
