"""Shared fixtures for sdp-explainer tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all sdp-explainer environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("sdp_explainer.config.load_dotenv", lambda *_a, **_kw: None)
    for key in ("SDP_EXPLAINER_LOG_LEVEL", "SDP_EXPLAINER_LINK_STYLE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def chrome_offer_text() -> str:
    """Text of the Chrome-style audio+video offer fixture."""
    return (FIXTURES / "chrome_offer.sdp").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_loggers() -> Generator[None, None, None]:
    """Reset the root and package loggers after each test to prevent handler leaks."""
    loggers = [logging.getLogger(), logging.getLogger("sdp_explainer")]
    saved = [(logger.handlers[:], logger.level) for logger in loggers]
    yield
    for logger, (handlers, level) in zip(loggers, saved):
        logger.handlers = handlers
        logger.setLevel(level)
