"""Data models for sdp-explainer."""

from __future__ import annotations

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
from sdp_explainer.models.explanation import ExplanationDocument, Link
from sdp_explainer.models.record import Attribute, Record
from sdp_explainer.models.session import (
    MediaAttributes,
    MediaDescription,
    PayloadAttribute,
    SessionAttributes,
    SessionDescription,
)

__all__ = [
    "SSRC",
    "Attribute",
    "Candidate",
    "Connection",
    "ExplanationDocument",
    "Extmap",
    "Fingerprint",
    "Fmtp",
    "IceOptions",
    "IdentificationGroup",
    "Link",
    "Media",
    "MediaAttributes",
    "MediaDescription",
    "Msid",
    "MsidSemantic",
    "Origin",
    "PayloadAttribute",
    "RTCPAddress",
    "RTCPFeedback",
    "RTPMap",
    "Record",
    "Rid",
    "SSRCGroup",
    "SessionAttributes",
    "SessionDescription",
    "Timing",
]
