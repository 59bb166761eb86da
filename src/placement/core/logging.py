# placement/core/logging.py
"""
Logging setup for processes embedding a board.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
embedding process decides output once through ``configure_logging``.
"""
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from placement.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(
    level: str | None = None,
    *,
    json: bool = True,
    settings: Settings | None = None,
) -> logging.Handler:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level name. Defaults to ``settings.log_level``.
        json: Emit JSON lines (python-json-logger) instead of plain text.
        settings: Settings to read the default level from.

    Returns:
        The installed handler.
    """
    if level is None:
        level = (settings or Settings()).log_level

    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if json:
        handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Replace handlers so repeated calls do not duplicate output
    root.handlers = [handler]
    return handler
