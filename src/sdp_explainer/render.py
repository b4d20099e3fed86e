"""Console output formatters for sdp-explainer.

Renders record groups, explanation documents, session overviews and the
structured session view as plain text for the CLI.  Each ``format_*``
function returns a string; the ``print_*`` wrappers write it to stdout.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from pydantic import TypeAdapter

from sdp_explainer.grouping import RecordGroup
from sdp_explainer.models.explanation import ExplanationDocument
from sdp_explainer.models.record import Record
from sdp_explainer.models.session import SessionDescription
from sdp_explainer.overview import MediaOverview, SessionOverview

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_TABLE_HEADERS = ("PT", "Codec", "Fmtp", "RTCP Feedback")

_SESSION_ADAPTER: TypeAdapter[SessionDescription] = TypeAdapter(SessionDescription)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_groups(groups: Sequence[RecordGroup]) -> str:
    """Render groups as a line-by-line listing.

    Each group is a ``--- <label> ---`` heading followed by its records
    as ``  <line>: <type>=<value>``.  An empty sequence renders as an
    empty string.
    """
    lines: list[str] = []
    for group in groups:
        if lines:
            lines.append("")
        lines.append(f"--- {group.label} ---")
        if not group.members:
            lines.append("  (no records)")
        for record in group.members:
            lines.append(f"  {record.line:>3}: {record.text}")
    return "\n".join(lines)


def format_explanation(document: ExplanationDocument, link_style: str = "list") -> str:
    """Render an explanation document.

    Args:
        document: The document to render.
        link_style: ``"list"`` for a trailing References section, or
            ``"inline"`` for a single ``See:`` line after the body.

    Returns:
        Title, separator, blank-line separated paragraphs and references.
    """
    lines: list[str] = [document.title, "-" * min(len(document.title), _BANNER_WIDTH)]

    for paragraph in document.body:
        lines.append("")
        lines.append(paragraph)

    if document.links:
        lines.append("")
        if link_style == "inline":
            refs = ", ".join(f"{ref.label} <{ref.url}>" for ref in document.links)
            lines.append(f"See: {refs}")
        else:
            lines.append("References:")
            for ref in document.links:
                lines.append(f"  - {ref.label}: {ref.url}")

    return "\n".join(lines)


def format_no_explanation(record: Record, suggestion: str | None = None) -> str:
    """Message shown when a record has no explanation."""
    message = f"No explanation available for line {record.line}: {record.text}"
    if suggestion:
        message += f"\nDid you mean a={suggestion}?"
    return message


def format_overview(overview: SessionOverview) -> str:
    """Render a session overview as one table per media section."""
    lines: list[str] = [_SEPARATOR, "  SESSION OVERVIEW", _SEPARATOR]

    bundle = " ".join(overview.bundle) if overview.bundle else "none"
    lines.append(f"  BUNDLE: {bundle}")
    lines.append(f"  ICE lite: {'yes' if overview.ice_lite else 'no'}")

    if not overview.media:
        lines.append("")
        lines.append("  No media sections.")

    for media in overview.media:
        _append_media(lines, media)

    lines.append(_SEPARATOR)
    return "\n".join(lines)


def format_session_json(session: SessionDescription) -> str:
    """Serialise the structured session view as indented JSON."""
    return _SESSION_ADAPTER.dump_json(session, indent=2).decode("utf-8")


def print_groups(groups: Sequence[RecordGroup]) -> None:
    """Format and print record groups to stdout."""
    sys.stdout.write(format_groups(groups) + "\n")


def print_explanation(document: ExplanationDocument, link_style: str = "list") -> None:
    """Format and print an explanation document to stdout."""
    sys.stdout.write(format_explanation(document, link_style) + "\n")


def print_overview(overview: SessionOverview) -> None:
    """Format and print a session overview to stdout."""
    sys.stdout.write(format_overview(overview) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_media(lines: list[str], media: MediaOverview) -> None:
    """Append the payload table and header extensions of one section."""
    lines.append("")
    heading = f"--- Media {media.index}: {media.media_type or 'unknown'}"
    if media.mid is not None:
        heading += f" (mid {media.mid})"
    lines.append(heading + " ---")

    if media.direction:
        lines.append(f"  Direction: {media.direction}")

    if media.payloads:
        rows = [
            (
                str(row.payload_type),
                row.codec or "-",
                row.fmtp or "-",
                ", ".join(row.feedbacks) or "-",
            )
            for row in media.payloads
        ]
        _append_table(lines, _TABLE_HEADERS, rows)
    else:
        lines.append("  No RTP payloads.")

    if media.header_extensions:
        lines.append("  Header extensions:")
        for extension in media.header_extensions:
            lines.append(f"    {extension}")


def _append_table(
    lines: list[str],
    headers: tuple[str, ...],
    rows: list[tuple[str, ...]],
) -> None:
    """Append a left-aligned, space-padded table."""
    widths = [
        max(len(headers[col]), *(len(row[col]) for row in rows))
        for col in range(len(headers))
    ]
    lines.append("  " + "  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip())
    lines.append("  " + "  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  " + "  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())
