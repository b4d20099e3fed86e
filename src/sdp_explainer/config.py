"""Configuration loading for sdp-explainer.

Reads settings from environment variables (with .env support via python-dotenv)
and validates every value before returning.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

_VALID_LINK_STYLES: frozenset[str] = frozenset({"inline", "list"})


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        link_style: How the text renderer prints reference links:
            ``"list"`` (a trailing References section, the default) or
            ``"inline"`` (one line directly after the body).
    """

    log_level: str = "INFO"
    link_style: str = "list"


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Unset or blank variables fall back to the
    :class:`Settings` defaults.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If any variable holds an unsupported value.  The
            error message names **all** offending variables.
    """
    load_dotenv()

    values: dict[str, str] = {}
    invalid: list[str] = []

    log_level = os.environ.get("SDP_EXPLAINER_LOG_LEVEL", "").strip()
    if log_level:
        if isinstance(logging.getLevelName(log_level.upper()), int):
            values["log_level"] = log_level.upper()
        else:
            invalid.append(f"SDP_EXPLAINER_LOG_LEVEL={log_level!r}")

    link_style = os.environ.get("SDP_EXPLAINER_LINK_STYLE", "").strip().lower()
    if link_style:
        if link_style in _VALID_LINK_STYLES:
            values["link_style"] = link_style
        else:
            invalid.append(f"SDP_EXPLAINER_LINK_STYLE={link_style!r}")

    if invalid:
        raise ConfigError(f"Invalid configuration values: {', '.join(invalid)}")

    return Settings(**values)
