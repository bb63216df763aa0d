"""Logging configuration helpers."""

import logging

_LOGGER_NAME = "nutrilog"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the application logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
