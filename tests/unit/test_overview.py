"""Unit tests for the per-section session overview."""

from __future__ import annotations

from sdp_explainer.models.attributes import Fmtp, RTCPFeedback
from sdp_explainer.models.session import SessionDescription
from sdp_explainer.overview import (
    PayloadRow,
    build_overview,
    format_feedback,
    format_fmtp,
)
from sdp_explainer.parser import parse_session


class TestFormatHelpers:
    """Compact renderings of feedback and fmtp entries."""

    def test_feedback_without_parameter(self) -> None:
        assert format_feedback(RTCPFeedback("96", "nack")) == "nack"

    def test_feedback_with_parameter(self) -> None:
        assert format_feedback(RTCPFeedback("96", "nack", "pli")) == "nack:pli"

    def test_fmtp_pairs(self) -> None:
        fmtp = Fmtp("111", {"minptime": "10", "useinbandfec": "1"})

        assert format_fmtp(fmtp) == "minptime=10;useinbandfec=1"

    def test_fmtp_bare_token(self) -> None:
        assert format_fmtp(Fmtp("101", {"0-15": ""})) == "0-15"


class TestBuildOverview:
    """Summaries built from the session view."""

    def test_chrome_offer(self, chrome_offer_text: str) -> None:
        overview = build_overview(parse_session(chrome_offer_text))

        assert overview.bundle == ("0", "1")
        assert overview.ice_lite is False
        assert [m.media_type for m in overview.media] == ["audio", "video"]
        assert [m.index for m in overview.media] == [1, 2]
        assert [m.mid for m in overview.media] == ["0", "1"]
        assert [m.direction for m in overview.media] == ["sendrecv", "sendonly"]

    def test_payload_rows(self, chrome_offer_text: str) -> None:
        video = build_overview(parse_session(chrome_offer_text)).media[1]

        assert video.payloads == (
            PayloadRow(
                payload_type=96,
                codec="VP8/90000",
                feedbacks=("goog-remb", "nack", "nack:pli", "ccm:fir"),
            ),
            PayloadRow(payload_type=97, codec="rtx/90000", fmtp="apt=96"),
        )

    def test_rows_sorted_by_payload_type(self, chrome_offer_text: str) -> None:
        """Audio lists 111 before 63 on the m= line; rows are sorted."""
        audio = build_overview(parse_session(chrome_offer_text)).media[0]

        assert [row.payload_type for row in audio.payloads] == [63, 111]

    def test_header_extensions(self, chrome_offer_text: str) -> None:
        audio = build_overview(parse_session(chrome_offer_text)).media[0]

        assert audio.header_extensions == (
            "1 urn:ietf:params:rtp-hdrext:ssrc-audio-level",
            "4 urn:ietf:params:rtp-hdrext:sdes:mid",
        )

    def test_static_payload_without_rtpmap(self) -> None:
        overview = build_overview(parse_session("v=0\nm=audio 9 RTP/AVP 0 8"))

        assert overview.media[0].payloads == (PayloadRow(0), PayloadRow(8))

    def test_no_bundle(self) -> None:
        overview = build_overview(parse_session("v=0\na=group:LS 1 2\na=ice-lite"))

        assert overview.bundle == ()
        assert overview.ice_lite is True
        assert overview.media == ()

    def test_unparsed_media_line(self) -> None:
        overview = build_overview(parse_session("v=0\nm=audio"))

        assert overview.media[0].media_type is None
        assert overview.media[0].payloads == ()

    def test_empty_session(self) -> None:
        overview = build_overview(SessionDescription())

        assert overview.media == ()
        assert overview.bundle == ()
