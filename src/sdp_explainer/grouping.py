"""Record grouping for the line-by-line view.

Partitions the flat record list into one session-level group followed by
one group per media section.  The top-level entry point is
:func:`group_records`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sdp_explainer.models.attributes import Media
from sdp_explainer.models.record import MEDIA, Record

logger = logging.getLogger(__name__)

SESSION_LABEL = "session description"
MEDIA_LABEL = "media description"


@dataclass(frozen=True)
class RecordGroup:
    """A contiguous run of records forming one logical section.

    Attributes:
        key: 1-based position of the group, increasing across the tree.
        label: ``"session description"`` or ``"media description"``,
            the latter suffixed with the media type when known
            (e.g. ``"media description (audio)"``).
        members: The section's records in file order.
    """

    key: int
    label: str
    members: tuple[Record, ...] = field(default_factory=tuple)


def media_label(first_member: Record) -> str:
    """Label for a media group whose first record is *first_member*."""
    media = first_member.parsed
    if isinstance(media, Media) and media.media_type:
        return f"{MEDIA_LABEL} ({media.media_type})"
    return MEDIA_LABEL


def group_records(records: Sequence[Record]) -> list[RecordGroup]:
    """Group records into a session section and media sections.

    Every record before the first ``m=`` line belongs to the session
    group, which is emitted even when empty (a transcript starting with
    ``m=``).  Each ``m=`` record opens a new media group that runs up to,
    but not including, the next ``m=`` record.

    Args:
        records: Records in file order, as returned by
            :func:`~sdp_explainer.parser.parse_records`.

    Returns:
        The groups in order.  Concatenating their members reproduces
        *records* exactly.  An empty input yields an empty list.
    """
    if not records:
        return []

    groups: list[RecordGroup] = []
    current_label = SESSION_LABEL
    current_members: list[Record] = []

    def _flush_current() -> None:
        """Close the open group and append it to the results list."""
        groups.append(
            RecordGroup(
                key=len(groups) + 1,
                label=current_label,
                members=tuple(current_members),
            )
        )

    for record in records:
        if record.category == MEDIA:
            # The session group is closed even if empty; a media group is
            # closed as soon as it holds its own m= record.
            if current_label == SESSION_LABEL or current_members:
                _flush_current()
            current_label = media_label(record)
            current_members = [record]
        else:
            current_members.append(record)

    _flush_current()

    logger.debug("Grouped %d records into %d groups", len(records), len(groups))
    return groups
