import logging
import os
import sys
from typing import Optional

# HTTP client loggers that log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logger(name: str = "poet", level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    if level is None:
        logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    # stderr: stdout carries the poem transcript
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return logger
