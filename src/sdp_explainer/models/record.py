"""Record-level data models for parsed session descriptions.

A :class:`Record` is one non-blank line of the transcript.  These are
plain stdlib dataclasses; the typed payloads they may carry live in
:mod:`sdp_explainer.models.attributes`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Record categories (the single letter before ``=``).
VERSION = "v"
ORIGIN = "o"
SESSION_NAME = "s"
SESSION_INFO = "i"
URI = "u"
EMAIL = "e"
PHONE = "p"
CONNECTION = "c"
BANDWIDTH = "b"
TIME_ZONES = "z"
ENCRYPTION_KEY = "k"
ATTRIBUTE = "a"
TIMING = "t"
REPEAT_TIMES = "r"
MEDIA = "m"

RECORD_TYPES: frozenset[str] = frozenset(
    {
        VERSION,
        ORIGIN,
        SESSION_NAME,
        SESSION_INFO,
        URI,
        EMAIL,
        PHONE,
        CONNECTION,
        BANDWIDTH,
        TIME_ZONES,
        ENCRYPTION_KEY,
        ATTRIBUTE,
        TIMING,
        REPEAT_TIMES,
        MEDIA,
    }
)


@dataclass(frozen=True)
class Attribute:
    """The decomposed value of an ``a=`` line.

    Attributes:
        field: Attribute name, the text before the first ``:`` (or the
            whole value for flag attributes such as ``rtcp-mux``).
        value: Text after the first ``:``, or ``""`` for flags.
        parsed: Typed sub-value, or ``None`` when the field has no
            structured model or its value failed to parse.
    """

    field: str
    value: str = ""
    parsed: Any = None


@dataclass(frozen=True)
class Record:
    """One parsed line of a session description.

    Attributes:
        line: 1-based physical line number in the original text.
        category: Single-letter record type (``"v"``, ``"m"``, ``"a"``...).
        raw_value: Everything after the ``=``.
        parsed: Typed payload for non-attribute records (e.g.
            :class:`~sdp_explainer.models.attributes.Media` for ``m=``),
            or ``None``.
        attribute: Decomposed attribute, present only for ``a=`` records.
    """

    line: int
    category: str
    raw_value: str
    parsed: Any = None
    attribute: Attribute | None = None

    @property
    def text(self) -> str:
        """The record as it appears in the transcript (``<category>=<value>``)."""
        return f"{self.category}={self.raw_value}"
