"""Entry point for ``python -m sdp_explainer``.

Provides a CLI that reads a session description from a file (or stdin)
and shows it grouped line by line, explains individual lines, or
summarises it.  Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    lines    -- Default. Grouped line-by-line listing.
    explain  -- Explanation for one line (or every explainable line).
    overview -- Payload and header-extension tables per media section.
    json     -- The structured session view as JSON.

Exit codes:
    0 -- Completed successfully (including empty input).
    1 -- An error occurred (file not found, parse failure, config error).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from sdp_explainer.annotation import explain_record, suggest_field
from sdp_explainer.config import ConfigError, load_settings
from sdp_explainer.exceptions import SDPParseError
from sdp_explainer.grouping import group_records
from sdp_explainer.log import get_logger, setup_logging
from sdp_explainer.models.record import Record
from sdp_explainer.models.session import SessionDescription
from sdp_explainer.overview import build_overview
from sdp_explainer.parser import build_session, parse_records, unwrap_input
from sdp_explainer.render import (
    format_explanation,
    format_no_explanation,
    format_session_json,
    print_explanation,
    print_groups,
    print_overview,
)

logger = get_logger(__name__)

_SUBCOMMANDS = ("lines", "explain", "overview", "json")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="sdp-explainer",
        description="Inspect and explain SDP session descriptions.",
    )

    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "sdp_file",
        type=str,
        help="Path to the SDP file, or '-' to read from stdin.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    subparsers.add_parser(
        "lines",
        parents=[common],
        help="Show the records grouped into session and media sections.",
    )

    explain_parser = subparsers.add_parser(
        "explain",
        parents=[common],
        help="Explain one line, or every explainable line.",
    )
    explain_parser.add_argument(
        "-l",
        "--line",
        type=int,
        default=None,
        help="1-based line number to explain (default: all lines).",
    )
    explain_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the explanation document(s) as JSON.",
    )

    subparsers.add_parser(
        "overview",
        parents=[common],
        help="Summarise payload types and header extensions per media section.",
    )
    subparsers.add_parser(
        "json",
        parents=[common],
        help="Print the structured session description as JSON.",
    )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``lines`` when no subcommand is given.

    Args:
        parser: The top-level argument parser.
        argv: Command-line arguments.

    Returns:
        Parsed :class:`argparse.Namespace`.
    """
    if not argv:
        argv = ["lines"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in _SUBCOMMANDS:
        argv = ["lines", *argv]

    return parser.parse_args(argv)


def _read_source(sdp_file: str) -> str | None:
    """Read the SDP text from *sdp_file* (``-`` for stdin).

    Prints an error and returns ``None`` if the file cannot be read.
    """
    if sdp_file == "-":
        return sys.stdin.read()

    path = Path(sdp_file)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    if not path.is_file():
        print(f"Error: Not a file: {path}", file=sys.stderr)
        return None

    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        print(f"Error: Permission denied: {path}", file=sys.stderr)
        return None
    except UnicodeDecodeError:
        print(f"Error: Not a UTF-8 text file: {path}", file=sys.stderr)
        return None


def _parse(text: str) -> tuple[list[Record], SessionDescription] | None:
    """Parse both views; print the failure and return ``None`` on error."""
    try:
        records = parse_records(text)
        session = build_session(records)
    except SDPParseError as exc:
        logger.debug("Parse failure: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return None
    return records, session


def _handle_explain(
    args: argparse.Namespace,
    records: list[Record],
    session: SessionDescription,
    link_style: str,
) -> int:
    """Execute the ``explain`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` if the requested line has no record.
    """
    if args.line is not None:
        selected = [record for record in records if record.line == args.line]
        if not selected:
            print(f"Error: No record on line {args.line}", file=sys.stderr)
            return 1
    else:
        selected = records

    if args.json:
        payload: list[dict[str, object]] = []
        for record in selected:
            document = explain_record(record, session)
            payload.append(
                {
                    "line": record.line,
                    "record": record.text,
                    "explanation": document.model_dump(mode="json") if document else None,
                }
            )
        sys.stdout.write(json.dumps(payload if args.line is None else payload[0], indent=2) + "\n")
        return 0

    if args.line is not None:
        record = selected[0]
        document = explain_record(record, session)
        if document is None:
            field = record.attribute.field if record.attribute else ""
            print(format_no_explanation(record, suggest_field(field)))
        else:
            print_explanation(document, link_style)
        return 0

    blocks: list[str] = []
    for record in selected:
        document = explain_record(record, session)
        if document is not None:
            blocks.append(
                f"[line {record.line}] {record.text}\n\n{format_explanation(document, link_style)}"
            )
    sys.stdout.write("\n\n".join(blocks) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the sdp-explainer CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    # --- Configuration and logging ------------------------------------
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    # --- Load and parse -----------------------------------------------
    raw = _read_source(args.sdp_file)
    if raw is None:
        return 1

    text = unwrap_input(raw)
    if not text.strip():
        print("Nothing to show: the session description is empty.", file=sys.stderr)
        return 0

    parsed = _parse(text)
    if parsed is None:
        return 1
    records, session = parsed

    # --- Dispatch to subcommand handler -------------------------------
    if args.command == "explain":
        return _handle_explain(args, records, session, settings.link_style)
    if args.command == "overview":
        print_overview(build_overview(session))
        return 0
    if args.command == "json":
        sys.stdout.write(format_session_json(session) + "\n")
        return 0

    print_groups(group_records(records))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
