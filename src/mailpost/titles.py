#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Title suggestions for new posts.

Suggestions come from the name of the document the user is working in and
from the text around their cursor: the word, the line and the sentence at
point. Spans that are too short or too long to be a plausible title are
dropped; the document name is always offered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from mailpost.constants import TITLE_MAX_RAW_LENGTH, TITLE_MIN_TRIMMED_LENGTH

_WORD_RE = re.compile(r"\w+")
_SENTENCE_END_RE = re.compile(r"[.!?][\"')\]]*(?=\s)|\n[ \t]*\n")


def trim(text: str) -> str:
    """Remove leading and trailing whitespace, keeping interior whitespace."""
    return text.strip()


def is_title_candidate(span: Any) -> bool:
    """Return True when ``span`` is usable as a title suggestion.

    A span qualifies when it is a string, longer than four characters once
    trimmed, and shorter than sixty characters as given.
    """
    if not isinstance(span, str):
        return False
    return len(trim(span)) > TITLE_MIN_TRIMMED_LENGTH and len(span) < TITLE_MAX_RAW_LENGTH


def _unique(candidates: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.add(candidate)
            result.append(candidate)
    return result


def suggest_titles(
    buffer_name: str | None,
    word: Any = None,
    line: Any = None,
    sentence: Any = None,
) -> list[str]:
    """Build the ordered list of title suggestions.

    Parameters
    ----------
    buffer_name : str or None
        Name of the document the user is in. Always suggested first (when not
        blank), without the length filter.
    word, line, sentence : optional
        Text spans around the cursor. Each is suggested only when
        :func:`is_title_candidate` accepts it.

    Returns
    -------
    list of str
        Trimmed, deduplicated suggestions.

    Examples
    --------
    >>> suggest_titles("notes.txt", word="hi", line="A day at the lake")
    ['notes.txt', 'A day at the lake']

    """
    candidates = []
    if isinstance(buffer_name, str):
        candidates.append(trim(buffer_name))
    candidates.extend(trim(span) for span in (word, line, sentence) if is_title_candidate(span))
    return _unique(candidates)


@dataclass(frozen=True)
class ContextSpans:
    """Text spans surrounding a cursor position."""

    word: str | None
    line: str
    sentence: str


def _offset(text: str, point: int) -> int:
    # points are 1-indexed, clamped to the text like a cursor would be
    return min(max(point, 1), len(text) + 1) - 1


def context_spans(text: str, point: int = 1) -> ContextSpans:
    """Extract the word, line and sentence at a 1-indexed ``point``.

    The word is ``None`` when the cursor is not on or right after a word.
    """
    offset = _offset(text, point)

    word = None
    for match in _WORD_RE.finditer(text):
        if match.start() <= offset <= match.end():
            word = match.group(0)
            break
        if match.start() > offset:
            break

    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    line = text[line_start : line_end if line_end != -1 else len(text)]

    sentence_start = 0
    sentence_end = len(text)
    for match in _SENTENCE_END_RE.finditer(text):
        paragraph_break = match.group(0).startswith("\n")
        if match.end() < offset or (paragraph_break and match.end() <= offset):
            sentence_start = match.end()
        else:
            sentence_end = match.start() if paragraph_break else match.end()
            break
    sentence = " ".join(text[sentence_start:sentence_end].split())

    return ContextSpans(word=word, line=line, sentence=sentence)


def suggest_titles_from_text(buffer_name: str | None, text: str, point: int = 1) -> list[str]:
    """Suggest titles from a document's name and the text around ``point``."""
    spans = context_spans(text, point)
    return suggest_titles(buffer_name, word=spans.word, line=spans.line, sentence=spans.sentence)
