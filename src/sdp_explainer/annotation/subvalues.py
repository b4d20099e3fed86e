"""Sub-value explanations appended after a field's base explanation.

Exclusive tables pick at most one entry per key (extmap URI, codec name,
feedback type, ssrc-group semantic).  Additive rule lists are scanned in
their declared order and contribute one entry per key present (fmtp
parameters, ssrc attributes), so paragraph order never depends on the
order of the parsed parameters.
"""

from __future__ import annotations

from sdp_explainer.annotation.catalog import Template, link

_LIBWEBRTC_HDREXT = "https://webrtc.googlesource.com/src/+/refs/heads/main/docs/native-code/rtp-hdrext"
_TWCC_DRAFT = (
    "https://datatracker.ietf.org/doc/html/draft-holmer-rmcat-transport-wide-cc-extensions-01"
)
_RFC_6184 = "https://datatracker.ietf.org/doc/html/rfc6184#section-8.1"
_RFC_7587 = "https://datatracker.ietf.org/doc/html/rfc7587#section-6.1"
_AV1_RTP = "https://aomediacodec.github.io/av1-rtp-spec/#72-sdp-parameters"

_SDES_ITEMS = (
    "It defines an RTP header extension that can carry RTCP source description "
    "(SDES) items."
)

# ---------------------------------------------------------------------------
# a=extmap -- keyed by header extension URI (exact match)
# ---------------------------------------------------------------------------

EXTMAP_TEMPLATES: dict[str, Template] = {
    "urn:ietf:params:rtp-hdrext:toffset": Template(
        paragraphs=(
            "**urn:ietf:params:rtp-hdrext:toffset** is an RTP header extension that "
            "conveys a transmission time offset for media packets.",
        ),
        links=(link("RFC 5450", "https://www.rfc-editor.org/rfc/rfc5450.html"),),
    ),
    "http://www.webrtc.org/experiments/rtp-hdrext/abs-send-time": Template(
        paragraphs=(
            "**http://www.webrtc.org/experiments/rtp-hdrext/abs-send-time** is the "
            "**Absolute Send Time** extension, used to stamp RTP packets with the "
            "time they departed the system that put them on the wire.",
        ),
        links=(link("libwebrtc abs-send-time", f"{_LIBWEBRTC_HDREXT}/abs-send-time"),),
    ),
    "urn:3gpp:video-orientation": Template(
        paragraphs=(
            "**urn:3gpp:video-orientation** is an RTP header extension that conveys "
            "the orientation of video frames, typically from mobile devices.",
        ),
        links=(
            link(
                "3GPP TS 26.114",
                "https://www.etsi.org/deliver/etsi_ts/126100_126199/126114/16.07.00_60/ts_126114v160700p.pdf",
            ),
        ),
    ),
    "http://www.ietf.org/id/draft-holmer-rmcat-transport-wide-cc-extensions-01": Template(
        paragraphs=(
            "**http://www.ietf.org/id/draft-holmer-rmcat-transport-wide-cc-extensions-01** "
            "carries a transport-wide packet sequence number. The receiver feeds back "
            "the arrival times and sequence numbers of the packets received on the "
            "connection in an RTCP message.",
        ),
        links=(link("draft-holmer-rmcat-transport-wide-cc-extensions-01", _TWCC_DRAFT),),
    ),
    "http://www.webrtc.org/experiments/rtp-hdrext/playout-delay": Template(
        paragraphs=(
            "**http://www.webrtc.org/experiments/rtp-hdrext/playout-delay** lets the "
            "RTP sender limit the amount of playout delay at the receiver to a "
            "certain range. The minimum and maximum delay guide the range over which "
            "the receiver can smooth out rendering.",
        ),
        links=(link("libwebrtc playout-delay", f"{_LIBWEBRTC_HDREXT}/playout-delay"),),
    ),
    "http://www.webrtc.org/experiments/rtp-hdrext/video-content-type": Template(
        paragraphs=(
            "The **Video Content Type** extension communicates a video content type "
            "from the sender to the receiver of an RTP video stream.",
            "A value of 0x00 means unspecified, and a value of 0x01 means **screenshare**.",
        ),
        links=(link("libwebrtc video-content-type", f"{_LIBWEBRTC_HDREXT}/video-content-type"),),
    ),
    "http://www.webrtc.org/experiments/rtp-hdrext/video-timing": Template(
        paragraphs=(
            "The **Video Timing** extension communicates timing information on a "
            "per-frame basis to the receiver of an RTP video stream.",
        ),
        links=(link("libwebrtc video-timing", f"{_LIBWEBRTC_HDREXT}/video-timing"),),
    ),
    "http://www.webrtc.org/experiments/rtp-hdrext/color-space": Template(
        paragraphs=(
            "The **Color Space** extension communicates color space information and, "
            "optionally, the metadata needed to properly render a high dynamic range "
            "(HDR) video stream.",
        ),
        links=(link("libwebrtc color-space", f"{_LIBWEBRTC_HDREXT}/color-space"),),
    ),
    "urn:ietf:params:rtp-hdrext:sdes:mid": Template(
        paragraphs=(_SDES_ITEMS, "The **mid** item carries the m= section identifier."),
        links=(link("RFC 8852", "https://datatracker.ietf.org/doc/rfc8852/"),),
    ),
    "urn:ietf:params:rtp-hdrext:sdes:rtp-stream-id": Template(
        paragraphs=(_SDES_ITEMS, "The **rtp-stream-id** item carries the RID of the stream."),
        links=(link("RFC 8852", "https://datatracker.ietf.org/doc/rfc8852/"),),
    ),
    "urn:ietf:params:rtp-hdrext:sdes:repaired-rtp-stream-id": Template(
        paragraphs=(
            _SDES_ITEMS,
            "The **repaired-rtp-stream-id** item carries the RID of the stream a "
            "redundancy stream repairs.",
        ),
        links=(link("RFC 8852", "https://datatracker.ietf.org/doc/rfc8852/"),),
    ),
    "urn:ietf:params:rtp-hdrext:ssrc-audio-level": Template(
        paragraphs=(
            "**urn:ietf:params:rtp-hdrext:ssrc-audio-level** lets packets of RTP audio "
            "streams indicate, in an RTP header extension, the audio level of the "
            "audio sample carried in the packet.",
        ),
        links=(link("RFC 6464", "https://datatracker.ietf.org/doc/rfc6464/"),),
    ),
}

# ---------------------------------------------------------------------------
# a=rtpmap -- keyed by lower-cased encoding name
# ---------------------------------------------------------------------------

CODEC_TEMPLATES: dict[str, Template] = {
    "vp8": Template(
        paragraphs=(
            "**VP8** is one of the mandatory video codecs a fully WebRTC-compliant "
            "browser must support.",
        ),
        links=(link("RFC 7741", "https://datatracker.ietf.org/doc/html/rfc7741"),),
    ),
    "vp9": Template(
        paragraphs=(
            "The **VP9** video codec was developed by Google as the successor to VP8. "
            "Beyond compression improvements, VP9 is designed to allow "
            "spatially-scalable video encoding.",
        ),
        links=(
            link(
                "RTP Payload Format for VP9",
                "https://datatracker.ietf.org/doc/html/draft-ietf-payload-vp9-16",
            ),
        ),
    ),
    "h264": Template(
        paragraphs=(
            "Support for the **H.264** Constrained Baseline (CB) profile is required "
            "in all fully-compliant WebRTC implementations.",
        ),
        links=(link("RFC 6184", "https://datatracker.ietf.org/doc/html/rfc6184"),),
    ),
    "av1": Template(
        paragraphs=("**AV1** is an open, royalty-free video codec from the Alliance for Open Media.",),
        links=(link("RTP Payload Format For AV1", "https://aomediacodec.github.io/av1-rtp-spec/"),),
    ),
    "rtx": Template(
        paragraphs=(
            "**RTX**: RTP retransmission is an effective packet loss recovery "
            "technique for real-time applications with relaxed delay bounds.",
        ),
        links=(link("RFC 4588", "https://datatracker.ietf.org/doc/html/rfc4588"),),
    ),
    "red": Template(
        paragraphs=(
            "**RED** stands for REDundant coding, an RTP payload format for encoding "
            "redundant audio or video data.",
        ),
        links=(link("RFC 2198", "https://datatracker.ietf.org/doc/html/rfc2198"),),
    ),
    "ulpfec": Template(
        paragraphs=(
            "**ULPFEC** stands for Uneven Level Protection Forward Error Correction, "
            "one of the mechanisms WebRTC uses to recover from packet loss.",
        ),
        links=(link("RFC 5109", "https://datatracker.ietf.org/doc/html/rfc5109"),),
    ),
    "flexfec-03": Template(
        paragraphs=(
            "**FlexFEC** is a Forward Error Correction (FEC) scheme used in WebRTC to "
            "make video streams more resilient to loss.",
        ),
        links=(link("RFC 8627", "https://datatracker.ietf.org/doc/html/rfc8627"),),
    ),
    "opus": Template(
        paragraphs=("The **Opus** format is the primary format for audio in WebRTC.",),
        links=(
            link("RFC 6716", "https://datatracker.ietf.org/doc/html/rfc6716"),
            link("RFC 7587", "https://datatracker.ietf.org/doc/html/rfc7587"),
        ),
    ),
}

# ---------------------------------------------------------------------------
# a=rtcp-fb -- keyed by feedback type, then by parameter
# ---------------------------------------------------------------------------

FEEDBACK_TEMPLATES: dict[str, Template] = {
    "nack": Template(
        paragraphs=(
            "The **nack** feedback type indicates that negative acknowledgements are supported.",
        ),
    ),
    "ack": Template(
        paragraphs=(
            "The **ack** feedback type indicates that positive acknowledgements are supported.",
        ),
    ),
    "goog-remb": Template(
        paragraphs=(
            "The **goog-remb** feedback message notifies a sender of multiple media "
            "streams over the same RTP session of the total estimated available bit "
            "rate on the path to the receiving side.",
        ),
        links=(
            link(
                "draft-alvestrand-rmcat-remb-03",
                "https://datatracker.ietf.org/doc/html/draft-alvestrand-rmcat-remb-03",
            ),
        ),
    ),
    "transport-cc": Template(
        paragraphs=(
            "**transport-cc** is a transport-wide RTCP feedback message that sends "
            "back an arrival timestamp and a packet identifier for each packet received.",
        ),
        links=(link("draft-holmer-rmcat-transport-wide-cc-extensions-01", f"{_TWCC_DRAFT}#section-3"),),
    ),
    "ccm": Template(
        paragraphs=("**ccm** is the Codec Control Message feedback type.",),
        links=(link("RFC 5104", "https://www.rfc-editor.org/rfc/rfc5104.html"),),
    ),
}

# ``None`` is the entry for a feedback line without a parameter.
FEEDBACK_PARAMETER_TEMPLATES: dict[str, dict[str | None, Template]] = {
    "nack": {
        "pli": Template(paragraphs=("**pli** indicates the use of Picture Loss Indication feedback.",)),
        "sli": Template(paragraphs=("**sli** indicates the use of Slice Loss Indication feedback.",)),
        "rpsi": Template(
            paragraphs=("**rpsi** indicates the use of Reference Picture Selection Indication feedback.",)
        ),
        None: Template(
            paragraphs=(
                "The feedback type nack, **without parameters**, indicates use of the "
                "Generic NACK feedback format.",
            ),
            links=(link("RFC 4585", "https://datatracker.ietf.org/doc/html/rfc4585#section-6.2.1"),),
        ),
    },
    "ccm": {
        "fir": Template(paragraphs=("**fir** indicates support of the Full Intra Request (FIR).",)),
    },
}

# ---------------------------------------------------------------------------
# a=fmtp -- additive, one entry per parameter key present
# ---------------------------------------------------------------------------

FMTP_PARAMETER_RULES: tuple[tuple[str, Template], ...] = (
    (
        "apt",
        Template(
            paragraphs=(
                "For each primary codec where RTP retransmission should be used, a "
                'corresponding "a=rtpmap" line indicates "rtx" with the clock rate of '
                'the primary codec, and an "a=fmtp" line references the payload type '
                "of the primary codec through **apt**.",
            ),
            links=(link("RFC 4588", "https://datatracker.ietf.org/doc/html/rfc4588#section-8.6"),),
        ),
    ),
    (
        "profile-id",
        Template(
            paragraphs=(
                "The value of **profile-id** is an integer indicating the default VP9 "
                "coding profile.\n\n"
                "| Profile | Color Depth | Chroma Subsampling |\n"
                "|---------|-------------|--------------------|\n"
                "| 0       | 8 bit       | 4:2:0              |\n"
                "| 1       | 8 bit       | 4:2:2, 4:4:4       |\n"
                "| 2       | 10 or 12 bit| 4:2:0              |\n"
                "| 3       | 10 or 12 bit| 4:2:2, 4:4:4       |",
            ),
        ),
    ),
    (
        "level-asymmetry-allowed",
        Template(
            paragraphs=(
                "The **level-asymmetry-allowed** parameter MAY be used in SDP "
                "Offer/Answer to indicate whether level asymmetry, i.e. sending media "
                "encoded at a different level in the offerer-to-answerer direction "
                "than in the answerer-to-offerer direction, is allowed.",
            ),
            links=(link("RFC 6184", _RFC_6184),),
        ),
    ),
    (
        "packetization-mode",
        Template(
            paragraphs=(
                "When **packetization-mode** is 0 or not present, the single NAL mode "
                "MUST be used. When it is 1, the non-interleaved mode MUST be used. "
                "When it is 2, the interleaved mode MUST be used.",
            ),
            links=(link("RFC 6184", _RFC_6184),),
        ),
    ),
    (
        "profile-level-id",
        Template(
            paragraphs=(
                "The **profile-level-id** parameter indicates the default sub-profile "
                "(the subset of coding tools that may have been used to generate the "
                "stream or that the receiver supports) and the default level of the stream.",
            ),
            links=(link("RFC 6184", _RFC_6184),),
        ),
    ),
    (
        "level-idx",
        Template(
            paragraphs=(
                "The **level-idx** parameter is an integer indicating the highest AV1 "
                "level that may have been used to generate the bitstream or that the "
                "receiver supports. If it is not present, it MUST be inferred to be 5 "
                "(level 3.1).",
            ),
            links=(link("RTP Payload Format For AV1", _AV1_RTP),),
        ),
    ),
    (
        "profile",
        Template(
            paragraphs=(
                "The **profile** parameter is an integer indicating the highest AV1 "
                "profile that may have been used to generate the bitstream or that the "
                "receiver supports. If it is not present, it MUST be inferred to be 0 "
                '("Main" profile).',
            ),
            links=(link("RTP Payload Format For AV1", _AV1_RTP),),
        ),
    ),
    (
        "tier",
        Template(
            paragraphs=(
                "The **tier** parameter is an integer indicating the highest tier that "
                "may have been used to generate the bitstream or that the receiver "
                "supports. If it is not present, the tier MUST be inferred to be 0.",
            ),
            links=(link("RTP Payload Format For AV1", _AV1_RTP),),
        ),
    ),
    (
        "repair-window",
        Template(
            paragraphs=(
                "**repair-window**: the time that spans the source packets and the "
                "corresponding repair packets, in microseconds.",
            ),
            links=(link("RFC 8627", "https://datatracker.ietf.org/doc/html/rfc8627#section-5.1.1"),),
        ),
    ),
    (
        "minptime",
        Template(
            paragraphs=(
                "**minptime**: the minimum duration of media represented by a packet "
                "that SHOULD be encapsulated in a received packet, in milliseconds "
                "rounded up to the next full integer value.",
            ),
            links=(link("RFC 7587", _RFC_7587),),
        ),
    ),
    (
        "stereo",
        Template(
            paragraphs=(
                "**stereo** specifies whether the decoder prefers receiving stereo or "
                "mono signals: 1 means stereo is preferred, 0 means only mono is preferred.",
            ),
            links=(link("RFC 7587", _RFC_7587),),
        ),
    ),
    (
        "sprop-stereo",
        Template(
            paragraphs=(
                "**sprop-stereo** specifies whether the sender is likely to produce "
                "stereo audio: 1 means stereo is likely to be sent, 0 means the sender "
                "will likely only send mono.",
            ),
            links=(link("RFC 7587", _RFC_7587),),
        ),
    ),
    (
        "useinbandfec",
        Template(
            paragraphs=(
                "**useinbandfec** specifies that the decoder can take advantage of the "
                "Opus in-band FEC.",
            ),
            links=(link("RFC 7587", _RFC_7587),),
        ),
    ),
)

# ---------------------------------------------------------------------------
# a=ssrc -- additive, one entry per source attribute present
# ---------------------------------------------------------------------------

SSRC_ATTRIBUTE_RULES: tuple[tuple[str, Template], ...] = (
    (
        "cname",
        Template(
            paragraphs=(
                "The **cname** source attribute associates a media source with its "
                "Canonical End-Point Identifier (CNAME) source description (SDES) item.",
            ),
            links=(link("RFC 5576", "https://datatracker.ietf.org/doc/html/rfc5576#section-6.1"),),
        ),
    ),
    (
        "msid",
        Template(paragraphs=("**msid** is the same as the MediaStream ID in JavaScript.",)),
    ),
)

# ---------------------------------------------------------------------------
# a=ssrc-group -- keyed by semantic
# ---------------------------------------------------------------------------

SSRC_GROUP_TEMPLATES: dict[str, Template] = {
    "FID": Template(
        paragraphs=("**FID** means Flow Identification; the group pairs a source with its RTX repair flow.",),
        links=(link("RFC 5888", "https://datatracker.ietf.org/doc/html/rfc5888#section-7"),),
    ),
}
