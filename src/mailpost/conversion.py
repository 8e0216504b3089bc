#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Piping a post through an external converter before it is mailed.

When a converter such as ``markdown`` is configured, the part of the post
above the cutoff marker is converted and everything below it (the shortcode
block) is passed on untouched. The caller's text is never modified; every
function here works on copies.

Examples
--------
>>> find_end_of_post("bla bla\\n\\n<!-- end of post -->", "<!-- end of post -->")
10

"""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
import textwrap
from dataclasses import dataclass

from mailpost.constants import REFLOW_FILL_COLUMN

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK_RE = re.compile(r"(\n(?:[ \t]*\n)+)")


@dataclass(frozen=True)
class CutoffSplit:
    """A post split at its cutoff marker.

    Attributes
    ----------
    position : int
        1-indexed position of the boundary.
    content : str
        Text before the boundary, to be converted.
    remainder : str
        Text after the removed boundary line.
    marker_found : bool
        Whether the marker line was present.

    """

    position: int
    content: str
    remainder: str
    marker_found: bool


def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(marker)}$", re.MULTILINE)


def _line_end(text: str, start: int) -> int:
    # index just past the line starting at ``start``, newline included
    end = text.find("\n", start)
    return len(text) if end == -1 else end + 1


def find_end_of_post(text: str, marker: str) -> int:
    """Return the 1-indexed position of the first line equal to ``marker``.

    When no such line exists the start of the text (1) is returned, i.e. the
    whole post is treated as lying below the boundary.
    """
    match = _marker_pattern(marker).search(text)
    return match.start() + 1 if match else 1


def split_at_cutoff(text: str, marker: str) -> CutoffSplit:
    """Split ``text`` at the cutoff marker, dropping the boundary line.

    The line at the boundary is removed. With no marker the boundary is the
    start of the text, so the content is empty and the first line is dropped.
    """
    match = _marker_pattern(marker).search(text)
    if match is None:
        logger.warning("Cutoff marker %r not found; nothing above the shortcodes will be converted", marker)
        return CutoffSplit(position=1, content="", remainder=text[_line_end(text, 0) :], marker_found=False)

    start = match.start()
    return CutoffSplit(
        position=start + 1,
        content=text[:start],
        remainder=text[_line_end(text, start) :],
        marker_found=True,
    )


def run_converter(command: str, text: str) -> str:
    """Run ``command`` with ``text`` on stdin and return its stdout.

    Raises
    ------
    FileNotFoundError
        If the converter executable does not exist.
    subprocess.CalledProcessError
        If the converter exits with a non-zero status.

    """
    argv = shlex.split(command)
    logger.debug("Running converter: %s", argv)
    result = subprocess.run(argv, input=text, capture_output=True, text=True, check=True)
    if result.stderr:
        logger.debug("Converter stderr: %s", result.stderr.strip())
    return result.stdout


def _fill_paragraph(paragraph: str, width: int) -> str:
    if not paragraph.strip():
        return paragraph
    trailing = "\n" if paragraph.endswith("\n") else ""
    lines = paragraph.split("\n")
    indent = lines[0][: len(lines[0]) - len(lines[0].lstrip())]
    joined = indent + " ".join(line.strip() for line in lines if line.strip())
    if len(joined) > width:
        joined = textwrap.fill(joined, width=width, break_long_words=False, break_on_hyphens=False)
    return joined + trailing


def reflow(text: str, width: int = REFLOW_FILL_COLUMN) -> str:
    """Refill each paragraph of ``text`` to ``width`` columns.

    Paragraphs are separated by blank lines, which are kept as they are.
    Lines within a paragraph are joined with single spaces, so at the
    default width every paragraph ends up on one line. Blog platforms that
    turn line breaks into ``<br>`` tags then leave converted HTML alone.
    """
    parts = _PARAGRAPH_BREAK_RE.split(text)
    return "".join(part if index % 2 else _fill_paragraph(part, width) for index, part in enumerate(parts))


def convert_text(text: str, command: str, marker: str) -> str:
    """Convert the content of a post, keeping its shortcode block.

    Parameters
    ----------
    text : str
        Full post text.
    command : str
        Converter command line.
    marker : str
        Cutoff marker line.

    Returns
    -------
    str
        Converted and reflowed content followed by the text that was below
        the marker.

    """
    split = split_at_cutoff(text, marker)
    converted = run_converter(command, split.content)
    return reflow(converted) + split.remainder
