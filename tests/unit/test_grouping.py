"""Unit tests for record grouping.

Tests cover: empty input, session-only transcripts, the audio/video
example, consecutive media lines, transcripts that open with ``m=``,
label derivation, and the partition laws over a set of record sequences.
"""

from __future__ import annotations

import pytest

from sdp_explainer.grouping import (
    MEDIA_LABEL,
    SESSION_LABEL,
    RecordGroup,
    group_records,
    media_label,
)
from sdp_explainer.models.record import Record
from sdp_explainer.parser import parse_records

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _records(*lines: str) -> list[Record]:
    return parse_records("\n".join(lines))


def _flatten(groups: list[RecordGroup]) -> list[Record]:
    return [record for group in groups for record in group.members]


# Hand-built sequences used by the law tests below.
_SEQUENCES: dict[str, list[Record]] = {
    "empty": [],
    "session_only": _records("v=0", "o=- 1 2 IN IP4 127.0.0.1", "s=-", "t=0 0"),
    "audio_video": _records(
        "o=- 1 2 IN IP4 127.0.0.1",
        "s=-",
        "m=audio 9 RTP/AVP 111",
        "a=rtpmap:111 opus/48000/2",
        "m=video 9 RTP/AVP 96",
        "a=rtpmap:96 VP8/90000",
    ),
    "starts_with_media": _records("m=audio 9 RTP/AVP 0", "a=sendrecv"),
    "consecutive_media": _records("v=0", "m=audio 9 RTP/AVP 0", "m=video 9 RTP/AVP 96"),
    "trailing_media": _records("v=0", "s=-", "m=audio 9 RTP/AVP 0"),
    "malformed_media": _records("v=0", "m=audio", "a=mid:0"),
    "only_media": _records("m=audio 9 RTP/AVP 0", "m=video 9 RTP/AVP 96", "m=text 9 RTP/AVP 98"),
}


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestGroupRecords:
    """Concrete grouping scenarios."""

    def test_empty_input(self) -> None:
        """No records yields no groups."""
        assert group_records([]) == []

    def test_session_only(self) -> None:
        """Without m= lines there is exactly one session group."""
        records = _SEQUENCES["session_only"]

        groups = group_records(records)

        assert len(groups) == 1
        assert groups[0].label == SESSION_LABEL
        assert list(groups[0].members) == records
        assert groups[0].key == 1

    def test_audio_video(self) -> None:
        """Session, audio and video groups with their own records."""
        records = _SEQUENCES["audio_video"]

        groups = group_records(records)

        assert [g.label for g in groups] == [
            "session description",
            "media description (audio)",
            "media description (video)",
        ]
        assert [len(g.members) for g in groups] == [2, 2, 2]
        assert [g.members[0].category for g in groups] == ["o", "m", "m"]
        assert groups[1].members[1].attribute.field == "rtpmap"
        assert [g.key for g in groups] == [1, 2, 3]

    def test_starts_with_media_keeps_empty_session_group(self) -> None:
        """A transcript opening with m= still has a (empty) session group."""
        groups = group_records(_SEQUENCES["starts_with_media"])

        assert len(groups) == 2
        assert groups[0].label == SESSION_LABEL
        assert groups[0].members == ()
        assert groups[1].label == "media description (audio)"

    def test_consecutive_media_lines_split(self) -> None:
        """Each m= line opens its own group, even with no records between."""
        groups = group_records(_SEQUENCES["consecutive_media"])

        assert [g.label for g in groups] == [
            "session description",
            "media description (audio)",
            "media description (video)",
        ]
        assert [len(g.members) for g in groups] == [1, 1, 1]

    def test_trailing_media_group_closed(self) -> None:
        """The last open group is emitted at end of input."""
        groups = group_records(_SEQUENCES["trailing_media"])

        assert len(groups) == 2
        assert groups[-1].members[0].category == "m"

    def test_chrome_offer(self, chrome_offer_text: str) -> None:
        """The fixture splits at lines 8 and 29."""
        groups = group_records(parse_records(chrome_offer_text))

        assert [g.members[0].line for g in groups] == [1, 8, 29]
        assert [g.members[-1].line for g in groups] == [7, 28, 53]

    def test_does_not_mutate_input(self) -> None:
        """The input list is left as it was."""
        records = _SEQUENCES["audio_video"]
        snapshot = list(records)

        group_records(records)

        assert records == snapshot


class TestMediaLabel:
    """Label derivation for media groups."""

    def test_with_media_type(self) -> None:
        record = _records("m=application 9 UDP/DTLS/SCTP webrtc-datachannel")[0]

        assert media_label(record) == "media description (application)"

    def test_without_structured_payload(self) -> None:
        """An unparsed m= line gets the bare label, never '(None)'."""
        record = _records("m=audio")[0]

        assert record.parsed is None
        assert media_label(record) == MEDIA_LABEL

    def test_malformed_media_group_label(self) -> None:
        groups = group_records(_SEQUENCES["malformed_media"])

        assert groups[1].label == MEDIA_LABEL


# ---------------------------------------------------------------------------
# Laws
# ---------------------------------------------------------------------------


class TestGroupingLaws:
    """Properties that hold for every record sequence."""

    @pytest.mark.parametrize("name", sorted(_SEQUENCES))
    def test_partition(self, name: str) -> None:
        """Concatenated members reproduce the input exactly."""
        records = _SEQUENCES[name]

        assert _flatten(group_records(records)) == records

    @pytest.mark.parametrize("name", sorted(n for n in _SEQUENCES if n != "empty"))
    def test_exactly_one_session_group_first(self, name: str) -> None:
        """One session group, always in first position."""
        groups = group_records(_SEQUENCES[name])

        labels = [g.label for g in groups]
        assert labels.count(SESSION_LABEL) == 1
        assert labels[0] == SESSION_LABEL

    @pytest.mark.parametrize("name", sorted(_SEQUENCES))
    def test_media_boundaries(self, name: str) -> None:
        """Media groups start with m= and hold no other m= record."""
        groups = group_records(_SEQUENCES[name])

        for group in groups[1:]:
            assert group.members[0].category == "m"
            assert all(r.category != "m" for r in group.members[1:])
        if groups:
            assert all(r.category != "m" for r in groups[0].members)

    @pytest.mark.parametrize("name", sorted(_SEQUENCES))
    def test_keys_increase_from_one(self, name: str) -> None:
        groups = group_records(_SEQUENCES[name])

        assert [g.key for g in groups] == list(range(1, len(groups) + 1))

    @pytest.mark.parametrize("name", sorted(_SEQUENCES))
    def test_idempotent(self, name: str) -> None:
        """Repeated calls give equal results."""
        records = _SEQUENCES[name]

        assert group_records(records) == group_records(records)
