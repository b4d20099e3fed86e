"""sdp-explainer: an inspection tool for SDP session descriptions.

Groups the lines of a session description into its session and media
sections and explains individual lines with references to the RFCs that
define them.
"""

from __future__ import annotations

from sdp_explainer.annotation import explain_record, suggest_field
from sdp_explainer.exceptions import SDPParseError
from sdp_explainer.grouping import RecordGroup, group_records
from sdp_explainer.models.explanation import ExplanationDocument, Link
from sdp_explainer.models.record import Attribute, Record
from sdp_explainer.models.session import MediaDescription, SessionDescription
from sdp_explainer.overview import SessionOverview, build_overview
from sdp_explainer.parser import (
    build_session,
    parse_records,
    parse_sdp_file,
    parse_session,
    unwrap_input,
)

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "ExplanationDocument",
    "Link",
    "MediaDescription",
    "Record",
    "RecordGroup",
    "SDPParseError",
    "SessionDescription",
    "SessionOverview",
    "build_overview",
    "build_session",
    "explain_record",
    "group_records",
    "parse_records",
    "parse_sdp_file",
    "parse_session",
    "suggest_field",
    "unwrap_input",
]
