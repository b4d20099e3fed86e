"""Record annotation: map one record to an explanation document.

Dispatch runs in up to three levels, each a table lookup:

1. record category (:data:`~.catalog.CATEGORY_TEMPLATES`),
2. attribute field for ``a=`` lines (:data:`~.catalog.FIELD_TEMPLATES`),
3. the attribute's parsed sub-value (tables in :mod:`.subvalues`).

The top-level entry point is :func:`explain_record`.  It is a pure
function of its inputs and never raises for malformed records.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from rapidfuzz import fuzz, process

from sdp_explainer.annotation.catalog import CATEGORY_TEMPLATES, FIELD_TEMPLATES, Template
from sdp_explainer.annotation.subvalues import (
    CODEC_TEMPLATES,
    EXTMAP_TEMPLATES,
    FEEDBACK_PARAMETER_TEMPLATES,
    FEEDBACK_TEMPLATES,
    FMTP_PARAMETER_RULES,
    SSRC_ATTRIBUTE_RULES,
    SSRC_GROUP_TEMPLATES,
)
from sdp_explainer.models.attributes import (
    SSRC,
    Extmap,
    Fmtp,
    RTCPFeedback,
    RTPMap,
    SSRCGroup,
)
from sdp_explainer.models.explanation import ExplanationDocument, Link
from sdp_explainer.models.record import ATTRIBUTE, Record
from sdp_explainer.models.session import MediaAttributes, SessionDescription

logger = logging.getLogger(__name__)

_SUGGESTION_CUTOFF = 80

# ---------------------------------------------------------------------------
# Sub-value dispatch (third level)
# ---------------------------------------------------------------------------


def _extmap_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, Extmap):
        return []
    template = EXTMAP_TEMPLATES.get(parsed.extension_name)
    return [template] if template else []


def _rtpmap_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, RTPMap):
        return []
    template = CODEC_TEMPLATES.get(parsed.encoding_name.lower())
    return [template] if template else []


def _rtcp_fb_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, RTCPFeedback):
        return []
    base = FEEDBACK_TEMPLATES.get(parsed.type)
    if base is None:
        return []
    # Unmatched parameters fall through to the type's base paragraph only.
    nested = FEEDBACK_PARAMETER_TEMPLATES.get(parsed.type, {}).get(parsed.parameter)
    return [base, nested] if nested else [base]


def _fmtp_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, Fmtp):
        return []
    return [template for key, template in FMTP_PARAMETER_RULES if key in parsed.parameters]


def _ssrc_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, SSRC):
        return []
    return [template for key, template in SSRC_ATTRIBUTE_RULES if key in parsed.attributes]


def _ssrc_group_details(parsed: Any) -> list[Template]:
    if not isinstance(parsed, SSRCGroup):
        return []
    template = SSRC_GROUP_TEMPLATES.get(parsed.semantic)
    return [template] if template else []


_DETAIL_DISPATCH: dict[str, Callable[[Any], list[Template]]] = {
    "extmap": _extmap_details,
    "rtpmap": _rtpmap_details,
    "rtcp-fb": _rtcp_fb_details,
    "fmtp": _fmtp_details,
    "ssrc": _ssrc_details,
    "ssrc-group": _ssrc_group_details,
}

# ---------------------------------------------------------------------------
# Session context
# ---------------------------------------------------------------------------


def _codec_name(attributes: MediaAttributes, payload_type: int) -> str | None:
    payload = attributes.payload(payload_type)
    if payload is None or payload.rtpmap is None:
        return None
    return payload.rtpmap.codec


def _to_payload_type(value: str) -> int | None:
    return int(value) if value.isdecimal() else None


def _context_paragraphs(record: Record, session: SessionDescription | None) -> list[str]:
    """Paragraphs that name codecs referenced by payload type.

    Only ``rtpmap``, ``rtcp-fb`` and ``fmtp`` records inside a media
    section get context; lookups that cannot be resolved add nothing.
    """
    if session is None or record.attribute is None:
        return []

    media_description = session.media_for_line(record.line)
    if media_description is None:
        return []

    attributes = media_description.attributes
    parsed = record.attribute.parsed
    paragraphs: list[str] = []

    if isinstance(parsed, RTPMap):
        media = media_description.media
        if media is not None and str(parsed.payload_type) not in media.formats:
            paragraphs.append(
                f"Payload type {parsed.payload_type} is not listed on the m={media.media_type} line."
            )
        for payload in attributes.payloads:
            if payload.fmtp is None or payload.rtpmap is None:
                continue
            if _to_payload_type(payload.fmtp.parameters.get("apt", "")) == parsed.payload_type:
                paragraphs.append(
                    f"Payload type {payload.payload_type} ({payload.rtpmap.codec}) "
                    f"carries retransmissions for this payload type."
                )

    elif isinstance(parsed, RTCPFeedback):
        if parsed.payload_type == "*":
            paragraphs.append("Applies to every payload type in this media section.")
        else:
            payload_type = int(parsed.payload_type)
            codec = _codec_name(attributes, payload_type)
            if codec:
                paragraphs.append(f"Applies to payload type {payload_type} ({codec}).")

    elif isinstance(parsed, Fmtp):
        payload_type = _to_payload_type(parsed.format)
        codec = _codec_name(attributes, payload_type) if payload_type is not None else None
        if codec:
            paragraphs.append(f"Applies to payload type {payload_type} ({codec}).")

        associated = _to_payload_type(parsed.parameters.get("apt", ""))
        associated_codec = _codec_name(attributes, associated) if associated is not None else None
        if associated_codec:
            paragraphs.append(
                f"The associated payload type is {associated} ({associated_codec})."
            )

    return paragraphs


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def _unique_links(templates: Iterable[Template]) -> tuple[Link, ...]:
    seen: set[str] = set()
    links: list[Link] = []
    for template in templates:
        for ref in template.links:
            if ref.url not in seen:
                seen.add(ref.url)
                links.append(ref)
    return tuple(links)


def _compose(
    title: str,
    templates: list[Template],
    context: list[str],
) -> ExplanationDocument:
    body = [paragraph for template in templates for paragraph in template.paragraphs]
    return ExplanationDocument(
        title=title,
        body=tuple(body + context),
        links=_unique_links(templates),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def explain_record(
    record: Record | None,
    session: SessionDescription | None = None,
) -> ExplanationDocument | None:
    """Build the explanation document for a selected record.

    Args:
        record: The selected record, or ``None`` when nothing is selected.
        session: The session view of the same transcript.  When given,
            payload-type references are resolved to codec names.

    Returns:
        An :class:`ExplanationDocument`, or ``None`` when the record's
        category or attribute field has no explanation.
    """
    if record is None:
        return None

    if record.category != ATTRIBUTE:
        template = CATEGORY_TEMPLATES.get(record.category)
        if template is None:
            return None
        return _compose(template.title or record.category, [template], [])

    attribute = record.attribute
    if attribute is None:
        return None

    base = FIELD_TEMPLATES.get(attribute.field)
    if base is None:
        logger.debug("No explanation for attribute %r on line %d", attribute.field, record.line)
        return None

    details = _DETAIL_DISPATCH.get(attribute.field)
    templates = [base, *(details(attribute.parsed) if details else [])]
    return _compose(
        base.title or f"a={attribute.field}",
        templates,
        _context_paragraphs(record, session),
    )


def suggest_field(name: str) -> str | None:
    """Return the known attribute field closest to *name*, if any is close.

    Used to hint at typos such as ``rtcpfb`` for ``rtcp-fb``.
    """
    if not name or name in FIELD_TEMPLATES:
        return None
    match = process.extractOne(
        name,
        list(FIELD_TEMPLATES),
        scorer=fuzz.ratio,
        score_cutoff=_SUGGESTION_CUTOFF,
    )
    return match[0] if match else None
