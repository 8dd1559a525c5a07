"""
JSON logging setup shared by the CLI and the validation script.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

ROOT_LOGGER = "talking_tools"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a JSON formatter to the package logger.

    Args:
        level: Logging level name, e.g. ``"INFO"``.
        log_file: Write JSON lines here instead of stderr.

    Returns:
        The configured ``talking_tools`` logger.  Calling again replaces the
        previous handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    formatter = jsonlogger.JsonFormatter(
        "%(timestamp)s %(levelname)s %(name)s %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # pyttsx3 drivers are chatty at INFO
    logging.getLogger("comtypes").setLevel(logging.WARNING)
    return logger
