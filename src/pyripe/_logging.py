"""Explicit, idempotent logging setup for pyripe.

Importing the package never configures logging; applications call
:func:`configure_logging` once (calling it again only changes the level).
"""

from __future__ import annotations

import logging
import threading

_LOGGER_NAME = "pyripe"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_lock = threading.Lock()
_handler: logging.Handler | None = None


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the ``pyripe`` logger and set its level.

    Parameters
    ----------
    level : int or str
        Logging level or level name (``"DEBUG"``, ``"INFO"``, ...).

    Returns
    -------
    logging.Logger
        The package logger.

    Raises
    ------
    ValueError
        If *level* is not a known level name.
    """
    global _handler
    logger = logging.getLogger(_LOGGER_NAME)
    if isinstance(level, str):
        level = level.strip().upper()
    with _lock:
        logger.setLevel(level)
        if _handler is None:
            _handler = logging.StreamHandler()
            _handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(_handler)
    return logger
