"""Typed payloads produced by the SDP line parser.

One frozen dataclass per structured line or attribute value.  Field names
follow the vocabulary of the RFCs that define each line, so the annotation
tables can key on them directly (``Extmap.extension_name``,
``RTPMap.encoding_name``, ``RTCPFeedback.type`` and so on).
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Non-attribute lines
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Origin:
    """``o=<username> <sess-id> <sess-version> <nettype> <addrtype> <unicast-address>``."""

    username: str
    session_id: str
    session_version: int
    net_type: str
    address_type: str
    unicast_address: str


@dataclass(frozen=True)
class Timing:
    """``t=<start-time> <stop-time>``."""

    start_time: int
    stop_time: int


@dataclass(frozen=True)
class Connection:
    """``c=<nettype> <addrtype> <connection-address>``."""

    net_type: str
    address_type: str
    connection_address: str


@dataclass(frozen=True)
class Media:
    """``m=<media> <port>[/<number of ports>] <proto> <fmt> ...``."""

    media_type: str
    port: int
    protocol: str
    formats: tuple[str, ...] = ()
    number_of_ports: int | None = None


# ---------------------------------------------------------------------------
# Attribute sub-values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IdentificationGroup:
    """``a=group:<semantics> <identification-tag> ...`` (RFC 5888)."""

    semantic: str
    identification_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class MsidSemantic:
    """``a=msid-semantic: <semantic> <identifier> ...``."""

    semantic: str
    identifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class RTCPAddress:
    """``a=rtcp:<port> [<nettype> <addrtype> <connection-address>]`` (RFC 3605)."""

    port: int
    net_type: str | None = None
    address_type: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class IceOptions:
    """``a=ice-options:<option> ...``."""

    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Fingerprint:
    """``a=fingerprint:<hash-function> <fingerprint>`` (RFC 8122)."""

    hash_function: str
    value: str


@dataclass(frozen=True)
class Extmap:
    """``a=extmap:<entry>[/<direction>] <URI> [<extension attributes>]`` (RFC 8285)."""

    entry: int
    extension_name: str
    direction: str | None = None
    extension_attributes: str | None = None


@dataclass(frozen=True)
class RTPMap:
    """``a=rtpmap:<payload type> <encoding name>/<clock rate>[/<encoding parameters>]``."""

    payload_type: int
    encoding_name: str
    clock_rate: int
    encoding_parameters: str | None = None

    @property
    def codec(self) -> str:
        """``<encoding name>/<clock rate>``, e.g. ``"VP8/90000"``."""
        return f"{self.encoding_name}/{self.clock_rate}"


@dataclass(frozen=True)
class RTCPFeedback:
    """``a=rtcp-fb:<payload type|*> <type> [<parameter>]`` (RFC 4585).

    ``payload_type`` stays a string so the wildcard ``"*"`` is representable.
    """

    payload_type: str
    type: str
    parameter: str | None = None


@dataclass(frozen=True)
class Fmtp:
    """``a=fmtp:<format> <parameter>=<value>;...``.

    A parameter token without ``=`` (e.g. ``0-15`` for telephone-event)
    maps to an empty string.
    """

    format: str
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SSRC:
    """``a=ssrc:<ssrc-id> <attribute>[:<value>]`` (RFC 5576).

    A single line carries one source attribute; the session view merges
    all lines for the same id into one entry.
    """

    id: int
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SSRCGroup:
    """``a=ssrc-group:<semantics> <ssrc-id> ...`` (RFC 5576)."""

    semantic: str
    ssrc_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class Msid:
    """``a=msid:<stream id> [<track id>]`` (RFC 8830)."""

    stream_id: str
    track_id: str | None = None


@dataclass(frozen=True)
class Candidate:
    """``a=candidate:<foundation> <component-id> <transport> <priority>
    <connection-address> <port> typ <cand-type> [<extension> <value>]...``.
    """

    foundation: str
    component: int
    transport: str
    priority: int
    address: str
    port: int
    type: str
    extensions: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Rid:
    """``a=rid:<rid-id> <send|recv> [<restrictions>]`` (RFC 8851)."""

    id: str
    direction: str
    restrictions: str | None = None
