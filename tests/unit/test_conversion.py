"""Unit tests for the cutoff splitter, converter invocation and reflow."""

import logging
import subprocess
from unittest.mock import patch

import pytest

from mailpost.conversion import convert_text, find_end_of_post, reflow, run_converter, split_at_cutoff

MARKER = "<!-- end of post -->"


@pytest.mark.unit
class TestFindEndOfPost:
    """Test locating the cutoff marker."""

    def test_marker_only(self):
        assert find_end_of_post(MARKER, MARKER) == 1

    def test_marker_after_content(self):
        assert find_end_of_post(f"bla bla\n\n{MARKER}", MARKER) == 10

    def test_missing_marker_reports_start(self):
        assert find_end_of_post("bla bla\n[status draft]\n", MARKER) == 1

    def test_first_occurrence_wins(self):
        text = f"ab\n{MARKER}\ncd\n{MARKER}\n"
        assert find_end_of_post(text, MARKER) == 4

    def test_marker_must_fill_the_line(self):
        text = f"see {MARKER} inline\n{MARKER}\n"
        assert find_end_of_post(text, MARKER) == text.index(f"\n{MARKER}") + 2

    def test_marker_is_literal(self):
        assert find_end_of_post("a\n[x]\n", "[.]") == 1


@pytest.mark.unit
class TestSplitAtCutoff:
    """Test splitting a post around the marker."""

    def test_split_removes_marker_line(self):
        split = split_at_cutoff(f"Hello\n\n{MARKER}\n[category X]\n", MARKER)
        assert split.marker_found
        assert split.position == 8
        assert split.content == "Hello\n\n"
        assert split.remainder == "[category X]\n"

    def test_split_marker_at_end_without_newline(self):
        split = split_at_cutoff(f"Hello\n{MARKER}", MARKER)
        assert split.content == "Hello\n"
        assert split.remainder == ""

    def test_missing_marker_drops_first_line(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mailpost.conversion"):
            split = split_at_cutoff("Hello\nWorld\n[status draft]\n", MARKER)

        assert not split.marker_found
        assert split.position == 1
        assert split.content == ""
        assert split.remainder == "World\n[status draft]\n"
        assert "not found" in caplog.text

    def test_input_is_not_modified(self):
        text = f"Hello\n{MARKER}\nrest\n"
        split_at_cutoff(text, MARKER)
        assert text == f"Hello\n{MARKER}\nrest\n"


@pytest.mark.unit
class TestReflow:
    """Test refilling paragraphs."""

    def test_paragraph_lines_joined(self):
        assert reflow("one\ntwo\nthree\n") == "one two three\n"

    def test_paragraph_breaks_kept(self):
        assert reflow("a\nb\n\nc\nd\n") == "a b\n\nc d\n"

    def test_interior_whitespace_collapsed_at_line_joins(self):
        assert reflow("<p>one   \n   two</p>") == "<p>one two</p>"

    def test_first_line_indent_kept(self):
        assert reflow("  a\nb") == "  a b"

    def test_narrow_width_wraps(self):
        assert reflow("aaa bbb ccc", width=7) == "aaa bbb\nccc"

    def test_empty_text(self):
        assert reflow("") == ""


@pytest.mark.unit
class TestRunConverter:
    """Test the converter subprocess call."""

    def test_command_split_and_stdin(self):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="<p>hi</p>\n", stderr="")
        with patch("mailpost.conversion.subprocess.run", return_value=completed) as mock_run:
            assert run_converter("pandoc -f markdown -t html", "hi\n") == "<p>hi</p>\n"

        args, kwargs = mock_run.call_args
        assert args[0] == ["pandoc", "-f", "markdown", "-t", "html"]
        assert kwargs["input"] == "hi\n"
        assert kwargs["check"] is True

    def test_failure_propagates(self):
        error = subprocess.CalledProcessError(2, ["markdown"])
        with patch("mailpost.conversion.subprocess.run", side_effect=error):
            with pytest.raises(subprocess.CalledProcessError):
                run_converter("markdown", "hi")

    def test_missing_executable_propagates(self):
        with patch("mailpost.conversion.subprocess.run", side_effect=FileNotFoundError("markdown")):
            with pytest.raises(FileNotFoundError):
                run_converter("markdown", "hi")


@pytest.mark.unit
class TestConvertText:
    """Test converting a whole post."""

    def _fake_converter(self, stdout):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")
        return patch("mailpost.conversion.subprocess.run", return_value=completed)

    def test_content_converted_shortcodes_kept(self):
        text = f"Hello *you*\nthere\n\n{MARKER}\n[category X]\n[status draft]\n"
        with self._fake_converter("<p>Hello <em>you</em>\nthere</p>\n") as mock_run:
            result = convert_text(text, "markdown", MARKER)

        assert mock_run.call_args.kwargs["input"] == "Hello *you*\nthere\n\n"
        assert result == "<p>Hello <em>you</em> there</p>\n[category X]\n[status draft]\n"

    def test_missing_marker_converts_nothing(self):
        with self._fake_converter("") as mock_run:
            result = convert_text("Hello\n[status draft]\n", "markdown", MARKER)

        assert mock_run.call_args.kwargs["input"] == ""
        assert result == "[status draft]\n"
