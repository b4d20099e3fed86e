"""Integration tests for parsing the SDP fixture files.

These tests read real files from ``tests/fixtures/`` through
:func:`parse_sdp_file` and check record counts, the JSON envelope, and
error reporting for a malformed file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sdp_explainer.exceptions import SDPParseError
from sdp_explainer.parser import build_session, parse_sdp_file

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


class TestParseFixtureFiles:
    """Parsing the checked-in fixtures."""

    def test_chrome_offer(self) -> None:
        records = parse_sdp_file(FIXTURES / "chrome_offer.sdp")

        assert len(records) == 53
        assert records[0].text == "v=0"
        assert records[-1].text == "a=ssrc:2002 cname:user@example"
        assert sum(1 for r in records if r.category == "m") == 2

    def test_chrome_offer_every_known_attribute_parsed(self) -> None:
        """Every attribute of the fixture with a sub-parser yields a value."""
        records = parse_sdp_file(FIXTURES / "chrome_offer.sdp")

        unparsed = [
            r.text
            for r in records
            if r.attribute is not None
            and r.attribute.parsed is None
            and r.attribute.field
            not in {"sendrecv", "sendonly", "rtcp-mux", "rtcp-rsize", "extmap-allow-mixed"}
        ]
        assert unparsed == []

    def test_json_envelope(self) -> None:
        """A browser JSON dump is unwrapped and its CRLF endings handled."""
        records = parse_sdp_file(FIXTURES / "offer.json")

        assert [r.category for r in records] == ["v", "o", "s", "t", "m", "c", "a"]
        assert all(not r.raw_value.endswith("\r") for r in records)

        session = build_session(records)
        payload = session.media_descriptions[0].attributes.payload(111)
        assert payload is not None and payload.rtpmap is not None
        assert payload.rtpmap.codec == "opus/48000"

    def test_accepts_str_path(self) -> None:
        records = parse_sdp_file(str(FIXTURES / "offer.json"))

        assert len(records) == 7

    def test_malformed_file(self) -> None:
        with pytest.raises(SDPParseError) as exc_info:
            parse_sdp_file(FIXTURES / "malformed.sdp")

        assert exc_info.value.line_number == 4
        assert exc_info.value.raw_line == "this line is not a record"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="SDP file not found"):
            parse_sdp_file(tmp_path / "nope.sdp")
