import logging
import sys
from typing import Union

from salescope.config import Config

APP_NAME = "salescope"

def get_logger(name: str) -> Union[logging.Logger, logging.LoggerAdapter]:
    logger = logging.getLogger(name)
    if not logger.handlers:
        level = getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logging.LoggerAdapter(logger, extra={"app": APP_NAME})
