"""Custom exceptions for the SDP parsing adapter.

The annotation and grouping engines never raise for malformed input; the
only failure a caller has to handle is a transcript that does not follow
the line grammar.
"""

from __future__ import annotations


class SDPParseError(Exception):
    """Raised when a session description does not conform to the line grammar.

    Callers must discard any previously derived grouping or annotation
    output when this is raised; the engines are never run on partial data.

    Attributes:
        line_number: 1-based line number of the offending line, or ``0``
            when the failure is not tied to a single line.
        raw_line: The original line text that triggered the error.
    """

    def __init__(self, message: str, line_number: int = 0, raw_line: str = "") -> None:
        if line_number:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.raw_line = raw_line
