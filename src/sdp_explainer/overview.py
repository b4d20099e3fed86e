"""Per-section summary of a parsed session description.

Condenses a :class:`~sdp_explainer.models.session.SessionDescription`
into what a reader usually looks for first: the BUNDLE group, and for each
media section its payload types (codec, fmtp, RTCP feedback) and header
extensions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sdp_explainer.models.attributes import Fmtp, RTCPFeedback
from sdp_explainer.models.session import MediaDescription, PayloadAttribute, SessionDescription


@dataclass(frozen=True)
class PayloadRow:
    """One RTP payload type of a media section.

    Attributes:
        payload_type: Payload type number.
        codec: ``<encoding name>/<clock rate>``, or ``None`` when the
            section has no ``a=rtpmap`` for it (static payload types).
        fmtp: Format parameters as ``key=value;...``, or ``None``.
        feedbacks: RTCP feedback as ``type`` or ``type:parameter``.
    """

    payload_type: int
    codec: str | None = None
    fmtp: str | None = None
    feedbacks: tuple[str, ...] = ()


@dataclass(frozen=True)
class MediaOverview:
    """Summary of one media section.

    Attributes:
        index: 1-based position among the media sections.
        media_type: ``audio``, ``video``, ``application``... or ``None``
            if the ``m=`` line did not parse.
        mid: The section's ``a=mid``, if any.
        direction: ``sendrecv``, ``sendonly``, ``recvonly`` or
            ``inactive`` when declared.
        payloads: Payload rows sorted by payload type.
        header_extensions: ``<entry> <URI>`` for each ``a=extmap``.
    """

    index: int
    media_type: str | None
    mid: str | None = None
    direction: str | None = None
    payloads: tuple[PayloadRow, ...] = ()
    header_extensions: tuple[str, ...] = ()


@dataclass(frozen=True)
class SessionOverview:
    """Summary of a whole session description."""

    bundle: tuple[str, ...] = ()
    ice_lite: bool = False
    media: tuple[MediaOverview, ...] = field(default_factory=tuple)


def format_feedback(feedback: RTCPFeedback) -> str:
    """Render a feedback entry as ``type`` or ``type:parameter``."""
    if feedback.parameter:
        return f"{feedback.type}:{feedback.parameter}"
    return feedback.type


def format_fmtp(fmtp: Fmtp) -> str:
    """Render format parameters back to ``key=value;...`` form."""
    return ";".join(f"{key}={value}" if value else key for key, value in fmtp.parameters.items())


def _payload_row(payload: PayloadAttribute) -> PayloadRow:
    return PayloadRow(
        payload_type=payload.payload_type,
        codec=payload.rtpmap.codec if payload.rtpmap else None,
        fmtp=format_fmtp(payload.fmtp) if payload.fmtp else None,
        feedbacks=tuple(format_feedback(fb) for fb in payload.rtcp_feedbacks),
    )


def _media_overview(index: int, media_description: MediaDescription) -> MediaOverview:
    attributes = media_description.attributes
    rows = sorted(
        (_payload_row(payload) for payload in attributes.payloads),
        key=lambda row: row.payload_type,
    )
    return MediaOverview(
        index=index,
        media_type=media_description.media.media_type if media_description.media else None,
        mid=attributes.mid,
        direction=attributes.direction,
        payloads=tuple(rows),
        header_extensions=tuple(
            f"{extmap.entry} {extmap.extension_name}" for extmap in attributes.extmaps
        ),
    )


def build_overview(session: SessionDescription) -> SessionOverview:
    """Summarise *session* section by section.

    Args:
        session: A parsed session description.

    Returns:
        A :class:`SessionOverview`.  ``bundle`` holds the tags of the
        first ``a=group:BUNDLE`` line, if any.
    """
    bundle: tuple[str, ...] = ()
    for group in session.attributes.groups:
        if group.semantic == "BUNDLE":
            bundle = group.identification_tags
            break

    return SessionOverview(
        bundle=bundle,
        ice_lite=session.attributes.ice_lite,
        media=tuple(
            _media_overview(index, media_description)
            for index, media_description in enumerate(session.media_descriptions, start=1)
        ),
    )
