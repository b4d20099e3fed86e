"""Structured logging setup for sdp-explainer.

Configures the ``sdp_explainer`` logger namespace with ISO 8601 timestamps
and pipe-separated fields.  Only the package's own loggers are touched, so
an application that embeds the parser keeps control of the root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "sdp_explainer"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler added by setup_logging so repeated calls do not
# stack handlers or touch handlers added externally.
_HANDLER_ATTR = "_sdp_explainer_log_handler"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Configure the package logger with a structured formatter.

    Sets the level of the ``sdp_explainer`` logger and attaches a
    :class:`logging.StreamHandler` using the project log format.  Records
    still propagate to the root logger.

    Calling this function multiple times is safe -- it will not add
    duplicate handlers; the existing handler is set to *level*.

    Args:
        level: A standard logging level name (e.g. ``"DEBUG"``,
            ``"INFO"``, ``"WARNING"``), case-insensitive.
        stream: Where to write.  Defaults to the current ``sys.stderr``.

    Returns:
        The handler owned by sdp-explainer.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)

    for handler in package_logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            return handler

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    setattr(handler, _HANDLER_ATTR, True)
    package_logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``sdp_explainer`` namespace.

    Dotted names that already start with the package name are used as
    given; anything else becomes a child, e.g. ``"cli"`` ->
    ``"sdp_explainer.cli"``.
    """
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
