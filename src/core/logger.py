"""
Centralized logging configuration for authgate.

One stdout handler on the root logger serves the gate, the application and
uvicorn. The gate logs rejected logins and credentials at WARNING and
forwarded requests at DEBUG, so ``debug`` decides whether per-request
forwarding shows up.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug: bool = False) -> None:
    """
    Install the authgate log handler on the root logger.

    Args:
        debug: Log at DEBUG (every forwarded request) instead of INFO
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()

    # Replace rather than add, so repeated startups do not duplicate lines
    while root_logger.handlers:
        root_logger.removeHandler(root_logger.handlers[0])

    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    # uvicorn installs its own handlers; send everything through ours instead
    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        log = logging.getLogger(logger_name)
        log.handlers = []
        log.propagate = True

    # Access lines would repeat every redirect the gate issues
    logging.getLogger("uvicorn.access").setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
