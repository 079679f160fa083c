import logging
import sys
from contextlib import suppress
from typing import Literal

import coloredlogs

FORMAT_DATE = "%Y-%m-%d"
FORMAT_TIME = "%H:%M:%S"
FORMAT_DATETIME = f"{FORMAT_DATE} {FORMAT_TIME}"
FMT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s.%(funcName)s:%(lineno)d ─ %(message)s"


def enable_logging(log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]) -> None:
    """Set up the logging"""

    logger = logging.getLogger("matterhub")

    logger.setLevel(log_level)

    # keep our records out of the root logger, whoever owns it
    logger.propagate = False

    logger.handlers.clear()

    # the handler stays at NOTSET and the logger does the clamping, otherwise child loggers
    # configured below the handler's level are silently dropped
    coloredlogs.install(level=logging.NOTSET, logger=logger, fmt=FMT, datefmt=FORMAT_DATETIME)

    # coloredlogs.install resets the logger to WARNING
    logger.setLevel(log_level)

    # coloredlogs also attaches a handler to the root logger
    with suppress(IndexError):
        logging.getLogger().handlers.pop(0)

    logging.captureWarnings(True)

    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    sys.excepthook = lambda *args: logging.getLogger().exception("Uncaught exception", exc_info=args)
