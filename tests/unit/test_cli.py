"""Unit tests for the CLI entrypoint.

Tests cover: the implicit ``lines`` subcommand, missing arguments,
nonexistent and unreadable files, stdin input, --verbose, each subcommand,
parse failures, config errors, and empty input.
"""

from __future__ import annotations

import io
import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from sdp_explainer.__main__ import build_parser, main

_SDP = (
    "v=0\n"
    "o=- 1 2 IN IP4 127.0.0.1\n"
    "s=-\n"
    "t=0 0\n"
    "m=video 9 UDP/TLS/RTP/SAVPF 96\n"
    "a=rtpmap:96 VP8/90000\n"
    "a=rtcpfb:96 nack\n"
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_sdp(tmp_path: Path, text: str = _SDP, name: str = "offer.sdp") -> Path:
    """Write *text* to a file under *tmp_path* and return its path."""
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestArgumentParsing:
    """Subcommand routing."""

    def test_subcommands_registered(self) -> None:
        parser = build_parser()

        for command in ("lines", "explain", "overview", "json"):
            assert parser.parse_args([command, "x.sdp"]).command == command

    def test_explain_options(self) -> None:
        args = build_parser().parse_args(["explain", "x.sdp", "-l", "5", "--json"])

        assert args.line == 5
        assert args.json is True

    def test_missing_file_argument_shows_usage(
        self,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """No arguments -> exit code 2, stderr contains 'usage'."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "usage" in capsys.readouterr().err.lower()

    def test_explain_line_must_be_integer(
        self,
        tmp_path: Path,
        clean_env: None,
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["explain", str(_make_sdp(tmp_path)), "--line", "six"])

        assert exc_info.value.code == 2


class TestCLI:
    """Unit tests for ``sdp_explainer.__main__.main``."""

    def test_implicit_lines_command(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A bare file argument prints the grouped listing."""
        exit_code = main([str(_make_sdp(tmp_path))])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "--- session description ---" in out
        assert "--- media description (video) ---" in out
        assert "    6: a=rtpmap:96 VP8/90000" in out

    def test_nonexistent_file_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Nonexistent file -> exit code 1, stderr contains 'File not found'."""
        exit_code = main([str(tmp_path / "missing.sdp")])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_directory_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main([str(tmp_path)])

        assert exit_code == 1
        assert "Not a file" in capsys.readouterr().err

    def test_binary_file_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "blob.sdp"
        path.write_bytes(b"\xff\xfe\x00\x81")

        exit_code = main([str(path)])

        assert exit_code == 1
        assert "Not a UTF-8 text file" in capsys.readouterr().err

    def test_stdin_input(
        self,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """'-' reads the session description from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(_SDP))

        exit_code = main(["lines", "-"])

        assert exit_code == 0
        assert "    1: v=0" in capsys.readouterr().out

    def test_verbose_flag_sets_debug_logging(
        self,
        tmp_path: Path,
        clean_env: None,
    ) -> None:
        """-v flag -> setup_logging called with 'DEBUG'."""
        with patch("sdp_explainer.__main__.setup_logging") as mock_setup:
            exit_code = main(["-v", str(_make_sdp(tmp_path))])

        assert exit_code == 0
        mock_setup.assert_called_once_with("DEBUG")

    def test_configured_log_level_used(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("SDP_EXPLAINER_LOG_LEVEL", "warning")

        with patch("sdp_explainer.__main__.setup_logging") as mock_setup:
            main([str(_make_sdp(tmp_path))])

        mock_setup.assert_called_once_with("WARNING")

    def test_config_error(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("SDP_EXPLAINER_LINK_STYLE", "footnotes")

        exit_code = main([str(_make_sdp(tmp_path))])

        assert exit_code == 1
        assert "SDP_EXPLAINER_LINK_STYLE" in capsys.readouterr().err

    def test_parse_failure_prints_nothing_else(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A grammar failure reports the line and prints no partial output."""
        path = _make_sdp(tmp_path, "v=0\ns=-\ngarbage\n")

        exit_code = main([str(path)])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Line 3:" in captured.err

    def test_missing_version_line(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["overview", str(_make_sdp(tmp_path, "s=-\nv=0\n"))])

        assert exit_code == 1
        assert "must start with a v= line" in capsys.readouterr().err

    def test_empty_input(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Blank input is not an error; nothing is printed to stdout."""
        exit_code = main([str(_make_sdp(tmp_path, "\n\n"))])

        assert exit_code == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Nothing to show" in captured.err

    @pytest.mark.skipif(
        os.getuid() == 0,
        reason="Root user can read any file; permission test is meaningless.",
    )
    def test_unreadable_file_shows_error(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Unreadable file -> exit code 1, stderr contains 'Permission denied'."""
        path = _make_sdp(tmp_path)
        path.chmod(stat.S_IWUSR)

        try:
            exit_code = main([str(path)])

            assert exit_code == 1
            assert "Permission denied" in capsys.readouterr().err
        finally:
            # Restore permissions so tmp_path cleanup does not fail.
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestExplainCommand:
    """The ``explain`` subcommand."""

    def test_single_line(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["explain", str(_make_sdp(tmp_path)), "--line", "6"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("a=rtpmap:<payload type>")
        assert "**VP8**" in out
        assert "References:" in out

    def test_inline_link_style(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("SDP_EXPLAINER_LINK_STYLE", "inline")

        main(["explain", str(_make_sdp(tmp_path)), "-l", "6"])

        out = capsys.readouterr().out
        assert "See: RFC 4566 <" in out
        assert "References:" not in out

    def test_unknown_field_with_suggestion(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["explain", str(_make_sdp(tmp_path)), "-l", "7"])

        assert exit_code == 0
        assert capsys.readouterr().out == (
            "No explanation available for line 7: a=rtcpfb:96 nack\n"
            "Did you mean a=rtcp-fb?\n"
        )

    def test_non_decimal_payload_references(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """'²' in a format list or an apt value is explained, not a crash."""
        path = _make_sdp(
            tmp_path,
            "v=0\n"
            "m=video 9 UDP/TLS/RTP/SAVPF 96 97 ²\n"
            "a=rtpmap:96 VP8/90000\n"
            "a=rtpmap:97 rtx/90000\n"
            "a=fmtp:97 apt=²\n",
        )

        exit_code = main(["explain", str(path), "--line", "3"])

        assert exit_code == 0
        assert "**VP8**" in capsys.readouterr().out

    def test_missing_line(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["explain", str(_make_sdp(tmp_path)), "-l", "99"])

        assert exit_code == 1
        assert "No record on line 99" in capsys.readouterr().err

    def test_json_single_line(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["explain", str(_make_sdp(tmp_path)), "-l", "1", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["line"] == 1
        assert data["record"] == "v=0"
        assert data["explanation"]["title"] == "v=0"
        assert data["explanation"]["links"][0]["label"] == "RFC 4566"

    def test_json_all_lines(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["explain", str(_make_sdp(tmp_path)), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert [entry["line"] for entry in data] == [1, 2, 3, 4, 5, 6, 7]
        assert data[-1]["explanation"] is None

    def test_all_lines_text(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Without --line every explainable record gets a block."""
        main(["explain", str(_make_sdp(tmp_path))])

        out = capsys.readouterr().out
        assert "[line 1] v=0" in out
        assert "[line 6] a=rtpmap:96 VP8/90000" in out
        assert "[line 7]" not in out


class TestOtherCommands:
    """The ``overview`` and ``json`` subcommands."""

    def test_overview(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["overview", str(_make_sdp(tmp_path))])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "SESSION OVERVIEW" in out
        assert "--- Media 1: video ---" in out

    def test_json(
        self,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(["json", str(_make_sdp(tmp_path))])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["media_descriptions"][0]["media"]["media_type"] == "video"
