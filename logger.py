# logger.py - one console logger per module, same format everywhere
# the level comes from SUPERMARKET_LOG_LEVEL (INFO when unset)

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger:

    @staticmethod
    def get_logger(name: str, level=None) -> logging.Logger:
        if level is None:
            level = os.getenv("SUPERMARKET_LOG_LEVEL", "INFO").upper()

        logger = logging.getLogger(name)
        logger.setLevel(level)

        # modules imported twice must not print every line twice
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

        return logger
