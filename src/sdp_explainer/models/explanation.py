"""Pydantic models for record explanations.

- :class:`Link` -- one labelled reference URL.
- :class:`ExplanationDocument` -- the immutable document returned by the
  annotation engine for a selected record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    """A labelled reference to a standards document.

    Attributes:
        label: Human-readable label (e.g. ``"RFC 4566"``).
        url: Absolute URL of the reference.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    url: str


class ExplanationDocument(BaseModel):
    """Static documentation for one selected record.

    Paragraphs use light markdown (``**bold**`` and inline code); the
    renderer decides how to display it.

    Attributes:
        title: Heading, usually the line syntax (e.g. ``"a=rtpmap"``).
        body: Ordered prose blocks.  The field's base explanation comes
            first, followed by sub-value paragraphs and, when a session
            was supplied, context paragraphs.
        links: Ordered references, de-duplicated by URL.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    body: tuple[str, ...] = Field(default_factory=tuple)
    links: tuple[Link, ...] = Field(default_factory=tuple)
