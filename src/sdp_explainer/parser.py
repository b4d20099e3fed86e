"""Line parser for SDP session descriptions.

Turns raw session-description text into the flat list of
:class:`~sdp_explainer.models.record.Record` objects consumed by the
grouping engine, and into the nested
:class:`~sdp_explainer.models.session.SessionDescription` used as context
by the annotation engine.  Both views come from the same records.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from sdp_explainer.exceptions import SDPParseError
from sdp_explainer.models.attributes import (
    SSRC,
    Candidate,
    Connection,
    Extmap,
    Fingerprint,
    Fmtp,
    IceOptions,
    IdentificationGroup,
    Media,
    Msid,
    MsidSemantic,
    Origin,
    Rid,
    RTCPAddress,
    RTCPFeedback,
    RTPMap,
    SSRCGroup,
    Timing,
)
from sdp_explainer.models.record import (
    ATTRIBUTE,
    CONNECTION,
    MEDIA,
    ORIGIN,
    RECORD_TYPES,
    SESSION_NAME,
    TIMING,
    VERSION,
    Attribute,
    Record,
)
from sdp_explainer.models.session import (
    MediaAttributes,
    MediaDescription,
    PayloadAttribute,
    SessionAttributes,
    SessionDescription,
)

logger = logging.getLogger(__name__)

# Matches lines like: a=rtpmap:96 VP8/90000
_LINE_RE = re.compile(r"^(.)=(.*)$")

_EXTMAP_RE = re.compile(r"^(\d+)(?:/(\w+))?\s+(\S+)(?:\s+(.+))?$")
_RTPMAP_RE = re.compile(r"^(\d+)\s+([^/\s]+)/(\d+)(?:/(\S+))?$")
_RTCP_FB_RE = re.compile(r"^(\d+|\*)\s+(\S+)(?:\s+(.+))?$")
_FMTP_RE = re.compile(r"^(\S+)\s+(.*)$")
_SSRC_RE = re.compile(r"^(\d+)\s+([^:\s]+)(?::(.*))?$")
_RID_RE = re.compile(r"^(\S+)\s+(send|recv)(?:\s+(.+))?$")

DIRECTIONS: frozenset[str] = frozenset({"sendrecv", "sendonly", "recvonly", "inactive"})

# Attributes that carry no value and therefore no sub-model.
FLAG_FIELDS: frozenset[str] = DIRECTIONS | {
    "rtcp-mux",
    "rtcp-rsize",
    "ice-lite",
    "extmap-allow-mixed",
}


# ---------------------------------------------------------------------------
# Non-attribute line payloads
# ---------------------------------------------------------------------------


def _split_exact(value: str, count: int, what: str) -> list[str]:
    parts = value.split()
    if len(parts) != count:
        raise ValueError(f"{what} expects {count} fields, got {len(parts)}")
    return parts


def _parse_version(value: str) -> int:
    return int(value.strip())


def _parse_origin(value: str) -> Origin:
    username, session_id, version, net_type, address_type, address = _split_exact(
        value, 6, "origin"
    )
    return Origin(
        username=username,
        session_id=session_id,
        session_version=int(version),
        net_type=net_type,
        address_type=address_type,
        unicast_address=address,
    )


def _parse_timing(value: str) -> Timing:
    start, stop = _split_exact(value, 2, "timing")
    return Timing(start_time=int(start), stop_time=int(stop))


def _parse_connection(value: str) -> Connection:
    net_type, address_type, address = _split_exact(value, 3, "connection")
    return Connection(net_type=net_type, address_type=address_type, connection_address=address)


def _parse_media(value: str) -> Media:
    parts = value.split()
    if len(parts) < 3:
        raise ValueError("media expects at least <media> <port> <proto>")

    port_text, _, count_text = parts[1].partition("/")
    return Media(
        media_type=parts[0],
        port=int(port_text),
        protocol=parts[2],
        formats=tuple(parts[3:]),
        number_of_ports=int(count_text) if count_text else None,
    )


_RECORD_PARSERS: dict[str, Callable[[str], Any]] = {
    VERSION: _parse_version,
    ORIGIN: _parse_origin,
    TIMING: _parse_timing,
    CONNECTION: _parse_connection,
    MEDIA: _parse_media,
}


# ---------------------------------------------------------------------------
# Attribute sub-values
# ---------------------------------------------------------------------------


def _parse_token(value: str) -> str:
    token = value.strip()
    if not token:
        raise ValueError("empty value")
    return token


def _parse_group(value: str) -> IdentificationGroup:
    parts = value.split()
    if not parts:
        raise ValueError("group expects a semantic")
    return IdentificationGroup(semantic=parts[0], identification_tags=tuple(parts[1:]))


def _parse_msid_semantic(value: str) -> MsidSemantic:
    parts = value.split()
    if not parts:
        raise ValueError("msid-semantic expects a semantic")
    return MsidSemantic(semantic=parts[0], identifiers=tuple(parts[1:]))


def _parse_rtcp(value: str) -> RTCPAddress:
    parts = value.split()
    if len(parts) not in (1, 4):
        raise ValueError("rtcp expects <port> [<nettype> <addrtype> <address>]")
    if len(parts) == 1:
        return RTCPAddress(port=int(parts[0]))
    return RTCPAddress(
        port=int(parts[0]),
        net_type=parts[1],
        address_type=parts[2],
        address=parts[3],
    )


def _parse_ice_options(value: str) -> IceOptions:
    return IceOptions(options=tuple(value.split()))


def _parse_fingerprint(value: str) -> Fingerprint:
    hash_function, fingerprint = _split_exact(value, 2, "fingerprint")
    return Fingerprint(hash_function=hash_function, value=fingerprint)


def _parse_extmap(value: str) -> Extmap:
    match = _EXTMAP_RE.match(value.strip())
    if not match:
        raise ValueError("malformed extmap")
    return Extmap(
        entry=int(match.group(1)),
        direction=match.group(2),
        extension_name=match.group(3),
        extension_attributes=match.group(4),
    )


def _parse_rtpmap(value: str) -> RTPMap:
    match = _RTPMAP_RE.match(value.strip())
    if not match:
        raise ValueError("malformed rtpmap")
    return RTPMap(
        payload_type=int(match.group(1)),
        encoding_name=match.group(2),
        clock_rate=int(match.group(3)),
        encoding_parameters=match.group(4),
    )


def _parse_rtcp_fb(value: str) -> RTCPFeedback:
    match = _RTCP_FB_RE.match(value.strip())
    if not match:
        raise ValueError("malformed rtcp-fb")
    parameter = match.group(3)
    return RTCPFeedback(
        payload_type=match.group(1),
        type=match.group(2),
        parameter=parameter.strip() if parameter else None,
    )


def _parse_fmtp(value: str) -> Fmtp:
    match = _FMTP_RE.match(value.strip())
    if not match:
        raise ValueError("malformed fmtp")

    parameters: dict[str, str] = {}
    for chunk in match.group(2).split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, _, param_value = chunk.partition("=")
        parameters[key.strip()] = param_value.strip()

    return Fmtp(format=match.group(1), parameters=parameters)


def _parse_ssrc(value: str) -> SSRC:
    match = _SSRC_RE.match(value.strip())
    if not match:
        raise ValueError("malformed ssrc")
    return SSRC(
        id=int(match.group(1)),
        attributes={match.group(2): (match.group(3) or "").strip()},
    )


def _parse_ssrc_group(value: str) -> SSRCGroup:
    parts = value.split()
    if not parts:
        raise ValueError("ssrc-group expects a semantic")
    return SSRCGroup(semantic=parts[0], ssrc_ids=tuple(int(part) for part in parts[1:]))


def _parse_msid(value: str) -> Msid:
    parts = value.split()
    if len(parts) not in (1, 2):
        raise ValueError("msid expects <stream id> [<track id>]")
    return Msid(stream_id=parts[0], track_id=parts[1] if len(parts) == 2 else None)


def _parse_candidate(value: str) -> Candidate:
    parts = value.split()
    if len(parts) < 8 or parts[6] != "typ":
        raise ValueError("malformed candidate")

    # Trailing extensions come in name/value pairs (raddr, rport, generation...).
    extensions = dict(zip(parts[8::2], parts[9::2]))
    return Candidate(
        foundation=parts[0],
        component=int(parts[1]),
        transport=parts[2],
        priority=int(parts[3]),
        address=parts[4],
        port=int(parts[5]),
        type=parts[7],
        extensions=extensions,
    )


def _parse_rid(value: str) -> Rid:
    match = _RID_RE.match(value.strip())
    if not match:
        raise ValueError("malformed rid")
    return Rid(id=match.group(1), direction=match.group(2), restrictions=match.group(3))


_ATTRIBUTE_PARSERS: dict[str, Callable[[str], Any]] = {
    "group": _parse_group,
    "msid-semantic": _parse_msid_semantic,
    "rtcp": _parse_rtcp,
    "ice-ufrag": _parse_token,
    "ice-pwd": _parse_token,
    "ice-options": _parse_ice_options,
    "fingerprint": _parse_fingerprint,
    "setup": _parse_token,
    "mid": _parse_token,
    "extmap": _parse_extmap,
    "rtpmap": _parse_rtpmap,
    "rtcp-fb": _parse_rtcp_fb,
    "fmtp": _parse_fmtp,
    "candidate": _parse_candidate,
    "ssrc": _parse_ssrc,
    "ssrc-group": _parse_ssrc_group,
    "msid": _parse_msid,
    "rid": _parse_rid,
}


def _parse_payload(
    parsers: dict[str, Callable[[str], Any]],
    key: str,
    value: str,
    line_number: int,
) -> Any:
    """Run the sub-parser registered for *key*; ``None`` if absent or failing."""
    sub_parser = parsers.get(key)
    if sub_parser is None:
        return None
    try:
        return sub_parser(value)
    except ValueError as exc:
        logger.debug("Line %d: could not parse %r value %r: %s", line_number, key, value, exc)
        return None


def parse_attribute(value: str, line_number: int = 0) -> Attribute:
    """Decompose the value of an ``a=`` line into field, value and sub-value.

    Args:
        value: Everything after ``a=``.
        line_number: Line number used in debug logging.

    Returns:
        An :class:`Attribute`.  ``parsed`` is ``None`` for flag attributes,
        unknown fields, and values the field's sub-parser rejected.
    """
    field, _, attr_value = value.partition(":")
    field = field.strip()
    return Attribute(
        field=field,
        value=attr_value,
        parsed=_parse_payload(_ATTRIBUTE_PARSERS, field, attr_value, line_number),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_records(text: str) -> list[Record]:
    """Parse session-description text into a flat list of records.

    Args:
        text: Raw SDP text.  ``\\r\\n`` and ``\\n`` line endings are both
            accepted; blank lines are skipped but still counted for line
            numbering.

    Returns:
        Records in file order.  Empty or whitespace-only input yields an
        empty list.

    Raises:
        SDPParseError: If a non-blank line is not of the form
            ``<type>=<value>`` or uses an unknown type letter.
    """
    records: list[Record] = []

    for line_idx, raw_line in enumerate(text.split("\n")):
        line_number = line_idx + 1  # 1-based
        stripped = raw_line.strip()

        if not stripped:
            continue

        match = _LINE_RE.match(stripped)
        if not match:
            raise SDPParseError(
                f"Expected '<type>=<value>', got {stripped!r}",
                line_number=line_number,
                raw_line=raw_line,
            )

        category, value = match.group(1), match.group(2)
        if category not in RECORD_TYPES:
            raise SDPParseError(
                f"Unknown line type {category!r}",
                line_number=line_number,
                raw_line=raw_line,
            )

        if category == ATTRIBUTE:
            records.append(
                Record(
                    line=line_number,
                    category=category,
                    raw_value=value,
                    attribute=parse_attribute(value, line_number),
                )
            )
        else:
            records.append(
                Record(
                    line=line_number,
                    category=category,
                    raw_value=value,
                    parsed=_parse_payload(_RECORD_PARSERS, category, value, line_number),
                )
            )

    logger.debug("Parsed %d records", len(records))
    return records


def parse_session(text: str) -> SessionDescription:
    """Parse session-description text into the nested session view.

    Args:
        text: Raw SDP text.

    Returns:
        A freshly built :class:`SessionDescription`.

    Raises:
        SDPParseError: If any line fails :func:`parse_records`, or the
            first record is not a ``v=`` line.
    """
    return build_session(parse_records(text))


def build_session(records: Iterable[Record]) -> SessionDescription:
    """Assemble a :class:`SessionDescription` from already parsed records.

    Raises:
        SDPParseError: If the first record is not a ``v=`` line.
    """
    records = list(records)
    if not records:
        raise SDPParseError("Session description is empty")
    if records[0].category != VERSION:
        raise SDPParseError(
            "A session description must start with a v= line",
            line_number=records[0].line,
            raw_line=records[0].text,
        )

    session_fields: dict[str, Any] = {}
    session_attributes = _AttributeCollector()
    sections: list[_SectionBuilder] = []

    for record in records:
        if record.category == MEDIA:
            sections.append(_SectionBuilder(record))
        elif sections:
            sections[-1].add(record)
        elif record.category == ATTRIBUTE and record.attribute is not None:
            session_attributes.add(record.attribute)
        elif record.category == VERSION:
            session_fields.setdefault("version", record.parsed)
        elif record.category == ORIGIN:
            session_fields.setdefault("origin", record.parsed)
        elif record.category == SESSION_NAME:
            session_fields.setdefault("session_name", record.raw_value)
        elif record.category == TIMING:
            session_fields.setdefault("timing", record.parsed)
        elif record.category == CONNECTION:
            session_fields.setdefault("connection", record.parsed)

    return SessionDescription(
        attributes=session_attributes.build_session_attributes(),
        media_descriptions=tuple(section.build() for section in sections),
        **session_fields,
    )


def parse_sdp_file(file_path: str | Path) -> list[Record]:
    """Parse an SDP file into records.

    Reads the file at *file_path* as UTF-8 text, unwraps a JSON
    ``{"type": ..., "sdp": ...}`` envelope if present, and delegates to
    :func:`parse_records`.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        SDPParseError: If the content does not follow the line grammar.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"SDP file not found: {path}")

    return parse_records(unwrap_input(path.read_text(encoding="utf-8")))


def unwrap_input(text: str) -> str:
    """Return the ``sdp`` member of a JSON session-description object.

    Browsers serialise ``RTCSessionDescription`` as
    ``{"type": "offer", "sdp": "v=0\\r\\n..."}``; pasting that object is
    accepted as well as raw SDP.  Anything that is not such an object is
    returned unchanged.
    """
    try:
        obj = json.loads(text)
    except ValueError:
        return text

    if isinstance(obj, dict) and isinstance(obj.get("sdp"), str):
        return obj["sdp"]
    return text


# ---------------------------------------------------------------------------
# Session view builders
# ---------------------------------------------------------------------------


class _AttributeCollector:
    """Accumulates typed attributes for one level (session or media)."""

    def __init__(self) -> None:
        self.scalars: dict[str, Any] = {}
        self.flags: set[str] = set()
        self.direction: str | None = None
        self.groups: list[IdentificationGroup] = []
        self.fingerprints: list[Fingerprint] = []
        self.extmaps: list[Extmap] = []
        self.rtpmaps: dict[int, RTPMap] = {}
        self.fmtps: dict[str, Fmtp] = {}
        self.feedbacks: list[RTCPFeedback] = []
        self.ssrcs: dict[int, dict[str, str]] = {}
        self.ssrc_groups: list[SSRCGroup] = []
        self.msids: list[Msid] = []
        self.candidates: list[Candidate] = []
        self.rids: list[Rid] = []
        self.others: list[Attribute] = []

    def add(self, attribute: Attribute) -> None:
        field, parsed = attribute.field, attribute.parsed

        if field in DIRECTIONS:
            self.direction = field
        elif field in FLAG_FIELDS:
            self.flags.add(field)
        elif parsed is None:
            self.others.append(attribute)
        elif field in ("ice-ufrag", "ice-pwd", "ice-options", "setup", "mid", "msid-semantic", "rtcp"):
            self.scalars.setdefault(field, parsed)
        elif field == "group":
            self.groups.append(parsed)
        elif field == "fingerprint":
            self.fingerprints.append(parsed)
        elif field == "extmap":
            self.extmaps.append(parsed)
        elif field == "rtpmap":
            self.rtpmaps.setdefault(parsed.payload_type, parsed)
        elif field == "fmtp":
            self.fmtps.setdefault(parsed.format, parsed)
        elif field == "rtcp-fb":
            self.feedbacks.append(parsed)
        elif field == "ssrc":
            self.ssrcs.setdefault(parsed.id, {}).update(parsed.attributes)
        elif field == "ssrc-group":
            self.ssrc_groups.append(parsed)
        elif field == "msid":
            self.msids.append(parsed)
        elif field == "candidate":
            self.candidates.append(parsed)
        elif field == "rid":
            self.rids.append(parsed)

    def build_session_attributes(self) -> SessionAttributes:
        return SessionAttributes(
            groups=tuple(self.groups),
            msid_semantic=self.scalars.get("msid-semantic"),
            ice_ufrag=self.scalars.get("ice-ufrag"),
            ice_pwd=self.scalars.get("ice-pwd"),
            ice_options=self.scalars.get("ice-options"),
            ice_lite="ice-lite" in self.flags,
            fingerprints=tuple(self.fingerprints),
            setup=self.scalars.get("setup"),
            extmap_allow_mixed="extmap-allow-mixed" in self.flags,
            extmaps=tuple(self.extmaps),
            others=tuple(self.others),
        )

    def build_media_attributes(self, media: Media | None) -> MediaAttributes:
        return MediaAttributes(
            mid=self.scalars.get("mid"),
            direction=self.direction,
            ice_ufrag=self.scalars.get("ice-ufrag"),
            ice_pwd=self.scalars.get("ice-pwd"),
            ice_options=self.scalars.get("ice-options"),
            fingerprints=tuple(self.fingerprints),
            setup=self.scalars.get("setup"),
            rtcp=self.scalars.get("rtcp"),
            rtcp_mux="rtcp-mux" in self.flags,
            rtcp_rsize="rtcp-rsize" in self.flags,
            extmap_allow_mixed="extmap-allow-mixed" in self.flags,
            extmaps=tuple(self.extmaps),
            payloads=self._build_payloads(media),
            ssrcs=tuple(SSRC(id=ssrc_id, attributes=attrs) for ssrc_id, attrs in self.ssrcs.items()),
            ssrc_groups=tuple(self.ssrc_groups),
            msids=tuple(self.msids),
            candidates=tuple(self.candidates),
            rids=tuple(self.rids),
            others=tuple(self.others),
        )

    def _build_payloads(self, media: Media | None) -> tuple[PayloadAttribute, ...]:
        # Payload order follows the m= line; non-numeric formats (e.g.
        # webrtc-datachannel) have no RTP payload entry.
        if media is not None:
            payload_types = [int(fmt) for fmt in media.formats if fmt.isdecimal()]
        else:
            payload_types = list(self.rtpmaps)

        payloads: list[PayloadAttribute] = []
        for payload_type in dict.fromkeys(payload_types):
            key = str(payload_type)
            payloads.append(
                PayloadAttribute(
                    payload_type=payload_type,
                    rtpmap=self.rtpmaps.get(payload_type),
                    fmtp=self.fmtps.get(key),
                    rtcp_feedbacks=tuple(
                        fb for fb in self.feedbacks if fb.payload_type in (key, "*")
                    ),
                )
            )
        return tuple(payloads)


class _SectionBuilder:
    """Collects the records of one media section."""

    def __init__(self, media_record: Record) -> None:
        self.line = media_record.line
        self.media: Media | None = media_record.parsed
        self.connection: Connection | None = None
        self.attributes = _AttributeCollector()

    def add(self, record: Record) -> None:
        if record.category == ATTRIBUTE and record.attribute is not None:
            self.attributes.add(record.attribute)
        elif record.category == CONNECTION and self.connection is None:
            self.connection = record.parsed

    def build(self) -> MediaDescription:
        return MediaDescription(
            line=self.line,
            media=self.media,
            connection=self.connection,
            attributes=self.attributes.build_media_attributes(self.media),
        )
