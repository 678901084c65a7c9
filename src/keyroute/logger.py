"""
Package logger factory.
Emits one JSON object per line with UTC timestamps. Key material is never logged.
"""

import json
import logging
import sys
import time
from typing import Optional


def get_logger(name: str = "keyroute", level: Optional[int] = None) -> logging.Logger:
    """
    Get a structured logger for a keyroute component.

    Handlers are attached only once per logger name, so repeated calls
    from module import time do not duplicate output. Without a level the
    logger inherits the host application's configuration.

    Args:
        name: Logger name, usually the module's __name__
        level: Optional logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s",
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
