"""Shared logger for the calculator, server and client."""
import logging
import os

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger(name: str = "pocket_calculator") -> logging.Logger:
    """
    Create the package logger with a single stream handler.

    The level is read from the ``POCKET_CALCULATOR_LOG_LEVEL`` environment variable.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    # Avoid stacking handlers when the module is re-imported (e.g. in spawned processes)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(os.environ.get("POCKET_CALCULATOR_LOG_LEVEL", "INFO").upper())
    return log


logger: logging.Logger = _build_logger()
