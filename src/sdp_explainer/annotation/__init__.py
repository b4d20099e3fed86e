"""Record annotation engine: static explanations for SDP lines."""

from __future__ import annotations

from sdp_explainer.annotation.catalog import CATEGORY_TEMPLATES, FIELD_TEMPLATES, Template
from sdp_explainer.annotation.explainer import explain_record, suggest_field

__all__ = [
    "CATEGORY_TEMPLATES",
    "FIELD_TEMPLATES",
    "Template",
    "explain_record",
    "suggest_field",
]
