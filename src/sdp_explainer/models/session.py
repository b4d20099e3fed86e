"""Nested session-description view built from parsed records.

:class:`SessionDescription` is recreated wholesale on every successful
parse and never updated in place; all collections are tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field

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
from sdp_explainer.models.record import Attribute


@dataclass(frozen=True)
class PayloadAttribute:
    """Everything a media section says about one RTP payload type.

    Attributes:
        payload_type: Payload type number from the ``m=`` format list.
        rtpmap: The matching ``a=rtpmap`` entry, if any.
        fmtp: The matching ``a=fmtp`` entry, if any.
        rtcp_feedbacks: ``a=rtcp-fb`` entries for this payload type,
            including wildcard (``*``) entries, in line order.
    """

    payload_type: int
    rtpmap: RTPMap | None = None
    fmtp: Fmtp | None = None
    rtcp_feedbacks: tuple[RTCPFeedback, ...] = ()


@dataclass(frozen=True)
class SessionAttributes:
    """Typed view of the attributes that appear before the first ``m=`` line."""

    groups: tuple[IdentificationGroup, ...] = ()
    msid_semantic: MsidSemantic | None = None
    ice_ufrag: str | None = None
    ice_pwd: str | None = None
    ice_options: IceOptions | None = None
    ice_lite: bool = False
    fingerprints: tuple[Fingerprint, ...] = ()
    setup: str | None = None
    extmap_allow_mixed: bool = False
    extmaps: tuple[Extmap, ...] = ()
    others: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class MediaAttributes:
    """Typed view of the attributes of one media section."""

    mid: str | None = None
    direction: str | None = None
    ice_ufrag: str | None = None
    ice_pwd: str | None = None
    ice_options: IceOptions | None = None
    fingerprints: tuple[Fingerprint, ...] = ()
    setup: str | None = None
    rtcp: RTCPAddress | None = None
    rtcp_mux: bool = False
    rtcp_rsize: bool = False
    extmap_allow_mixed: bool = False
    extmaps: tuple[Extmap, ...] = ()
    payloads: tuple[PayloadAttribute, ...] = ()
    ssrcs: tuple[SSRC, ...] = ()
    ssrc_groups: tuple[SSRCGroup, ...] = ()
    msids: tuple[Msid, ...] = ()
    candidates: tuple[Candidate, ...] = ()
    rids: tuple[Rid, ...] = ()
    others: tuple[Attribute, ...] = ()

    def payload(self, payload_type: int) -> PayloadAttribute | None:
        """Return the payload entry for *payload_type*, or ``None``."""
        for payload in self.payloads:
            if payload.payload_type == payload_type:
                return payload
        return None


@dataclass(frozen=True)
class MediaDescription:
    """One media section, from its ``m=`` line up to the next one.

    Attributes:
        line: Line number of the section's ``m=`` record.
        media: Parsed ``m=`` line, or ``None`` if it failed to parse.
        connection: The section's ``c=`` line, if any.
        attributes: Typed attribute collections.
    """

    line: int
    media: Media | None
    connection: Connection | None = None
    attributes: MediaAttributes = field(default_factory=MediaAttributes)


@dataclass(frozen=True)
class SessionDescription:
    """Session-level fields plus the ordered media sections."""

    version: int | None = None
    origin: Origin | None = None
    session_name: str | None = None
    timing: Timing | None = None
    connection: Connection | None = None
    attributes: SessionAttributes = field(default_factory=SessionAttributes)
    media_descriptions: tuple[MediaDescription, ...] = ()

    def media_for_line(self, line: int) -> MediaDescription | None:
        """Return the media section containing *line*, or ``None`` for
        session-level lines."""
        found: MediaDescription | None = None
        for media_description in self.media_descriptions:
            if media_description.line > line:
                break
            found = media_description
        return found
