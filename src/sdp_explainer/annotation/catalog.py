"""Base explanations for SDP line types and attribute fields.

Two static tables drive the first and second dispatch levels of the
annotation engine:

- :data:`CATEGORY_TEMPLATES` -- keyed by line type (``v``, ``o``, ``s``,
  ``t``, ``m``, ``c``).
- :data:`FIELD_TEMPLATES` -- keyed by attribute field name for ``a=``
  lines.

Paragraphs use light markdown: ``**bold**`` for syntax and keywords.
"""

from __future__ import annotations

from dataclasses import dataclass

from sdp_explainer.models.explanation import Link


@dataclass(frozen=True)
class Template:
    """One reusable chunk of explanation.

    Attributes:
        paragraphs: Prose blocks, emitted in order.
        links: References attached to these paragraphs.
        title: Heading used when the template is a base explanation.
            Sub-value templates leave it unset.
    """

    paragraphs: tuple[str, ...]
    links: tuple[Link, ...] = ()
    title: str | None = None


def link(label: str, url: str) -> Link:
    """Shorthand for building a :class:`Link`."""
    return Link(label=label, url=url)


RFC_4566 = "https://datatracker.ietf.org/doc/html/rfc4566"
JSEP = "https://rtcweb-wg.github.io/jsep/"
ICE_SDP = "https://datatracker.ietf.org/doc/html/draft-ietf-mmusic-ice-sip-sdp-24"

# ---------------------------------------------------------------------------
# Line types
# ---------------------------------------------------------------------------

CATEGORY_TEMPLATES: dict[str, Template] = {
    "v": Template(
        title="v=0",
        paragraphs=(
            'The "v=" field gives the version of the Session Description Protocol. '
            "RFC 4566 defines version 0. There is no minor version number.",
        ),
        links=(link("RFC 4566", f"{RFC_4566}#section-5.1"),),
    ),
    "o": Template(
        title="o=<username> <sess-id> <sess-version> <nettype> <addrtype> <unicast-address>",
        paragraphs=(
            'The "o=" field gives the originator of the session (the username and '
            "the address of the user's host) plus a session identifier and version number.",
            'The value of the <username> field SHOULD be "-". The sess-id MUST be '
            "representable by a 64-bit signed integer, and the value MUST be less "
            "than (2**63)-1. It is RECOMMENDED that the sess-id be constructed by "
            "generating a 64-bit quantity with the highest bit set to zero and the "
            "remaining 63 bits being cryptographically random.",
            "The <nettype> <addrtype> <unicast-address> tuple SHOULD be set to a "
            "non-meaningful address, such as IN IP4 0.0.0.0, to prevent leaking a "
            "local IP address in this field. The entire o= line needs to be unique, "
            "but selecting a random number for <sess-id> is sufficient to accomplish this.",
        ),
        links=(
            link("RFC 4566", f"{RFC_4566}#section-5.2"),
            link("JSEP Initial Offers", f"{JSEP}#rfc.section.5.2.1"),
            link("JSEP Subsequent Offers", f"{JSEP}#rfc.section.5.2.2"),
        ),
    ),
    "s": Template(
        title="s=<session name>",
        paragraphs=(
            'The third SDP line MUST be a "s=" line. To match the "o=" line, a single '
            'dash SHOULD be used as the session name, e.g. "s=-". This differs from '
            "the advice in RFC 4566, which proposes a single space, but as both "
            '"o=" and "s=" are meaningless in JSEP, having the same meaningless '
            "value seems clearer.",
        ),
        links=(
            link("RFC 4566", f"{RFC_4566}#section-5.3"),
            link("JSEP Initial Offers", f"{JSEP}#rfc.section.5.2.1"),
        ),
    ),
    "t": Template(
        title="t=<start-time> <stop-time>",
        paragraphs=(
            'The "t=" lines specify the start and stop times for a session; both '
            '<start-time> and <stop-time> SHOULD be set to zero, e.g. "t=0 0".',
        ),
        links=(link("RFC 4566", f"{RFC_4566}#section-5.9"),),
    ),
    "m": Template(
        title="m=<media> <port> <proto> <fmt> ...",
        paragraphs=(
            "An m= section is generated for each RtpTransceiver that has been added "
            "to the PeerConnection, excluding any stopped RtpTransceivers, in the "
            "order the RtpTransceivers were added. If there are no such "
            "RtpTransceivers, no m= sections are generated; more can be added later.",
            "For each m= section generated for an RtpTransceiver, a mapping is "
            "established between the transceiver and the index of the generated m= section.",
            "Each m= section, provided it is not marked as bundle-only, MUST generate "
            "a unique set of ICE credentials and gather its own unique set of ICE "
            "candidates. Bundle-only m= sections MUST NOT contain any ICE credentials "
            "and MUST NOT gather any candidates.",
            "For DTLS, all m= sections MUST use all the certificate(s) that have been "
            "specified for the PeerConnection; as a result, they MUST all have the same "
            "fingerprint value(s), or these value(s) MUST be session-level attributes.",
        ),
        links=(
            link("RFC 4566", f"{RFC_4566}#section-5.14"),
            link("JSEP Initial Offers", f"{JSEP}#rfc.section.5.2.1"),
        ),
    ),
    "c": Template(
        title="c=<nettype> <addrtype> <connection-address>",
        paragraphs=(
            'The m= line MUST be followed immediately by a "c=" line. As no candidates '
            'are available yet when an offer is created, the "c=" line must contain '
            'the "dummy" value "IN IP4 0.0.0.0".',
            'Each "m=" and "c=" line MUST be filled in with the port and address of '
            "the default candidate for the m= section. In certain cases the m= line "
            "protocol may not match that of the default candidate, because the m= "
            "line protocol value MUST match what was supplied in the offer.",
        ),
        links=(
            link("RFC 4566", f"{RFC_4566}#section-5.7"),
            link("Trickle ICE", "https://datatracker.ietf.org/doc/html/rfc8838#section-5.1"),
        ),
    ),
}

# ---------------------------------------------------------------------------
# Attribute fields
# ---------------------------------------------------------------------------

_ICE_CREDENTIALS = (
    'The "ice-ufrag" and "ice-pwd" attributes convey the username fragment and '
    "password used by ICE for message integrity.",
    'The "ice-pwd" and "ice-ufrag" attributes can appear at either the session-level '
    "or media-level. When present in both, the value in the media-level takes "
    "precedence, so the session-level value is effectively a default for all data "
    "streams. There MUST be an ice-pwd and ice-ufrag attribute for each data stream. "
    "If two data streams have identical ice-ufrag's, they MUST have identical ice-pwd's.",
)

FIELD_TEMPLATES: dict[str, Template] = {
    "group": Template(
        title="a=group:<semantics> <identification-tag> ...",
        paragraphs=(
            'Once all m= sections have been generated, a session-level "a=group" '
            'attribute MUST be added. This attribute MUST have semantics "BUNDLE", '
            "and MUST include the mid identifiers of each m= section. The JSEP "
            "implementation thereby offers all m= sections as one bundle group; "
            "whether the m= sections are bundle-only or not depends on the bundle policy.",
        ),
        links=(link("RFC 5888", "https://datatracker.ietf.org/doc/html/rfc5888"),),
    ),
    "msid-semantic": Template(
        title="a=msid-semantic: <semantic> <identifier> ...",
        paragraphs=(
            "This line gives a unique identifier for the WebRTC Media Stream (WMS) "
            "during the PeerConnection's life. The identifier is used in the a=msid "
            "attributes of each m= line belonging to a specific MediaStream, "
            "explicitly associating each RTP stream with a MediaStream object.",
        ),
        links=(link("draft-ietf-mmusic-msid", "https://datatracker.ietf.org/doc/html/draft-ietf-mmusic-msid"),),
    ),
    "extmap-allow-mixed": Template(
        title="a=extmap-allow-mixed",
        paragraphs=(
            "To allow backward interoperability with systems that do not support "
            "mixing one-byte and two-byte header extensions, the "
            '"a=extmap-allow-mixed" attribute indicates whether the participant is '
            "capable of supporting this mode.",
        ),
        links=(link("RFC 8285", "https://www.rfc-editor.org/rfc/rfc8285.html#section-6"),),
    ),
    "rtcp": Template(
        title="a=rtcp:<port> [<nettype> <addrtype> <connection-address>]",
        paragraphs=(
            "The RTCP attribute documents the RTCP port used for the media stream, "
            "when that port is not the next higher (odd) port number following the "
            "RTP port described in the media line.",
        ),
        links=(link("RFC 3605", "https://datatracker.ietf.org/doc/html/rfc3605"),),
    ),
    "ice-ufrag": Template(
        title="a=ice-ufrag:<ufrag>",
        paragraphs=_ICE_CREDENTIALS,
        links=(link("ICE SDP Offer/Answer procedures", ICE_SDP),),
    ),
    "ice-pwd": Template(
        title="a=ice-pwd:<password>",
        paragraphs=_ICE_CREDENTIALS,
        links=(link("ICE SDP Offer/Answer procedures", ICE_SDP),),
    ),
    "ice-options": Template(
        title="a=ice-options:<option> ...",
        paragraphs=(
            "**Trickle ICE** is a supplementary mode of ICE operation in which "
            "candidates can be exchanged incrementally as soon as they become "
            "available, simultaneously with the gathering of other candidates. "
            "Connectivity checks can also start as soon as candidate pairs have "
            "been created, which can considerably accelerate session establishment.",
        ),
        links=(link("RFC 8838", "https://datatracker.ietf.org/doc/html/rfc8838"),),
    ),
    "fingerprint": Template(
        title="a=fingerprint:<hash-function> <fingerprint>",
        paragraphs=(
            'Because DTLS-SRTP is required, one or more "a=fingerprint" attributes '
            "must be present.",
            "When establishing the DTLS-SRTP connection, the fingerprint is verified "
            "against the DTLS certificate, allowing peers to authenticate each other "
            "before starting to transmit media.",
        ),
        links=(link("RFC 8122", "https://datatracker.ietf.org/doc/html/rfc8122"),),
    ),
    "setup": Template(
        title="a=setup:<role>",
        paragraphs=(
            "The 'setup' attribute indicates which of the end points should initiate "
            "the connection establishment.",
            "For WebRTC DTLS-SRTP, the offerer **MUST** use the value **setup:actpass** "
            "and be prepared to receive a DTLS client_hello before it receives the answer.",
            "The answerer MUST use either **setup:active** or **setup:passive**. With "
            "setup:passive the DTLS handshake does not begin until the answer is "
            "received, which adds latency; **setup:active** allows the answer and the "
            "handshake to occur in parallel and is therefore **RECOMMENDED**. Whichever "
            "party is active **MUST** initiate a DTLS handshake by sending a "
            "ClientHello over each flow (host/port quartet).",
        ),
        links=(
            link("RFC 5763", "https://datatracker.ietf.org/doc/html/rfc5763#section-5"),
            link("RFC 4145", "https://datatracker.ietf.org/doc/html/rfc4145#section-4.1"),
        ),
    ),
    "mid": Template(
        title="a=mid:<identification-tag>",
        paragraphs=(
            'The MID is a "media stream identification" value, which provides a more '
            "robust way to identify the m= section in the session description.",
            'The "a=group:BUNDLE" attribute MUST include the MID identifiers of the '
            "m= sections in the bundle group.",
        ),
        links=(link("RFC 5888", "https://datatracker.ietf.org/doc/html/rfc5888#section-4"),),
    ),
    "extmap": Template(
        title="a=extmap:<entry>[/<direction>] <URI> [<extension attributes>]",
        paragraphs=(
            "The a=extmap attribute defines a mapping for an RTP header extension, "
            "which allows the inclusion of additional metadata in RTP packets.",
        ),
        links=(link("RFC 8285", "https://www.rfc-editor.org/rfc/rfc8285.html"),),
    ),
    "rtpmap": Template(
        title="a=rtpmap:<payload type> <encoding name>/<clock rate>[/<encoding parameters>]",
        paragraphs=(
            "This attribute maps an RTP payload type number (as used in an \"m=\" "
            "line) to an encoding name denoting the payload format to be used. It "
            "also provides information on the clock rate and encoding parameters.",
        ),
        links=(link("RFC 4566", f"{RFC_4566}#section-6"),),
    ),
    "rtcp-fb": Template(
        title="a=rtcp-fb:<payload type> <type> [<parameter>]",
        paragraphs=(
            "The a=rtcp-fb attribute specifies feedback parameters for RTP streams, "
            "allowing receivers to provide feedback to senders about the quality of "
            "the media transmission.",
        ),
        links=(link("RFC 4585", "https://datatracker.ietf.org/doc/html/rfc4585#section-4.2"),),
    ),
    "fmtp": Template(
        title="a=fmtp:<format> <format specific parameters>",
        paragraphs=(
            "**fmtp** allows parameters that are specific to a particular format to "
            "be conveyed in a way that SDP does not have to understand them.",
        ),
        links=(link("RFC 4566", f"{RFC_4566}#section-6"),),
    ),
    "recvonly": Template(
        title="a=recvonly",
        paragraphs=(
            "If the offerer wishes to only receive media from its peer, it MUST mark "
            "the stream as recvonly.",
        ),
        links=(link("RFC 3264", "https://datatracker.ietf.org/doc/html/rfc3264#section-5.1"),),
    ),
    "sendonly": Template(
        title="a=sendonly",
        paragraphs=(
            "If the offerer wishes to only send media to its peer, it MUST mark the "
            "stream as sendonly.",
        ),
        links=(link("RFC 3264", "https://datatracker.ietf.org/doc/html/rfc3264#section-5.1"),),
    ),
    "rtcp-mux": Template(
        title="a=rtcp-mux",
        paragraphs=(
            "The **a=rtcp-mux** attribute indicates the desire to multiplex RTP and "
            "RTCP onto a single port.",
        ),
        links=(link("RFC 5761", "https://datatracker.ietf.org/doc/html/rfc5761#section-5.1.3"),),
    ),
    "rtcp-rsize": Template(
        title="a=rtcp-rsize",
        paragraphs=(
            "The **a=rtcp-rsize** attribute indicates that the session participant is "
            "capable of supporting Reduced-Size RTCP for applications that use SDP "
            "for configuration of RTP sessions.",
        ),
        links=(link("RFC 5506", "https://datatracker.ietf.org/doc/html/rfc5506"),),
    ),
    "candidate": Template(
        title=(
            "a=candidate:<foundation> <component-id> <transport> <priority> "
            "<connection-address> <port> typ <cand-type>"
        ),
        paragraphs=(
            "The **candidate** attribute is a media-level attribute only. It contains "
            "a transport address for a candidate that can be used for connectivity checks.",
            "<foundation>: an identifier that is equivalent for two candidates of the "
            "same type that share the same base and come from the same STUN server.",
            "<component-id>: for RTP-based data streams, candidates for the actual RTP "
            "media MUST have a component ID of 1, and candidates for RTCP MUST have a "
            "component ID of 2.",
            "<transport>: the transport protocol for the candidate.",
            "<priority>: used by ICE to determine the order of the connectivity checks "
            "and the relative preference for candidates. Higher values give more priority.",
            "<connection-address>: the IP address of the candidate.",
            "<port>: the port of the candidate.",
            '<cand-type>: "host", "srflx", "prflx" and "relay" for host, server '
            "reflexive, peer reflexive and relayed candidates.",
        ),
        links=(link("draft-ietf-mmusic-ice-sip-sdp-24", ICE_SDP),),
    ),
    "ice-lite": Template(
        title="a=ice-lite",
        paragraphs=(
            "**ice-lite** is a minimal version of the ICE specification, intended for "
            "servers running on a public IP address.",
            "An ice-lite media server only needs to answer incoming STUN binding "
            "requests and acts as the controlled agent in the ICE process. This "
            "simplicity makes it popular among SFUs and other media servers.",
        ),
        links=(link("RFC 8445", "https://datatracker.ietf.org/doc/html/rfc8445#section-2.5"),),
    ),
    "ssrc": Template(
        title="a=ssrc:<ssrc-id> <attribute>[:<value>]",
        paragraphs=(
            "**SSRC** describes RTP media sources, identified by their synchronization "
            "source (SSRC) identifiers, in SDP. It associates attributes with these "
            "sources and expresses relationships among them.",
        ),
        links=(link("RFC 5576", "https://datatracker.ietf.org/doc/html/rfc5576"),),
    ),
    "msid": Template(
        title="a=msid:<stream id> [<track id>]",
        paragraphs=(
            "The **msid** attribute allows endpoints to associate RTP streams that are "
            "described in separate media descriptions with the right MediaStreams. It "
            "also carries an identifier for each MediaStreamTrack in its appdata field.",
        ),
        links=(link("RFC 8830", "https://www.rfc-editor.org/rfc/rfc8830.html"),),
    ),
    "ssrc-group": Template(
        title="a=ssrc-group:<semantics> <ssrc-id> ...",
        paragraphs=(
            "**ssrc-group** expresses a relationship among several sources of an RTP session.",
        ),
        links=(link("RFC 5576", "https://datatracker.ietf.org/doc/html/rfc5576#section-4.2"),),
    ),
    "rid": Template(
        title="a=rid:<rid-id> <send|recv> [<restrictions>]",
        paragraphs=(
            "**rid** identifiers allow the individual encodings to be disambiguated "
            "even though they are all part of the same m= section.",
            "RIDs can express dependencies between layers of scalable encodings. "
            "Adding scalable layers to a session within a multiparty conference gives "
            "a selective forwarding unit (SFU) the flexibility to forward packets "
            "from a source that best match the bandwidth and capabilities of diverse receivers.",
        ),
        links=(link("RFC 8851", "https://datatracker.ietf.org/doc/html/rfc8851#section-11.2"),),
    ),
}
