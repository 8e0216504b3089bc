"""Unit tests for title suggestions."""

import pytest

from mailpost.titles import context_spans, is_title_candidate, suggest_titles, suggest_titles_from_text, trim


@pytest.mark.unit
class TestTrim:
    """Test whitespace trimming."""

    def test_trim_keeps_interior_whitespace(self):
        assert trim(" foo bar ") == "foo bar"

    @pytest.mark.parametrize("text", ["", "   ", "\tx\n", "a  b", " lead", "trail "])
    def test_trim_is_idempotent(self, text):
        assert trim(trim(text)) == trim(text)


@pytest.mark.unit
class TestCandidateFilter:
    """Test which spans qualify as titles."""

    def test_short_spans_are_rejected(self):
        assert not is_title_candidate("abcd")
        assert not is_title_candidate("   abcd   ")

    def test_five_characters_qualify(self):
        assert is_title_candidate("abcde")

    def test_raw_length_limit_counts_whitespace(self):
        assert is_title_candidate("x" * 59)
        assert not is_title_candidate("x" * 60)
        assert not is_title_candidate("  " + "x" * 58)

    def test_non_text_is_rejected(self):
        assert not is_title_candidate(None)
        assert not is_title_candidate(12345678)


@pytest.mark.unit
class TestSuggestTitles:
    """Test the suggestion list."""

    def test_buffer_name_always_included(self):
        assert suggest_titles("ab") == ["ab"]

    def test_buffer_name_comes_first(self):
        result = suggest_titles("notes.txt", word="lakeside", line="A day at the lake")
        assert result == ["notes.txt", "lakeside", "A day at the lake"]

    def test_filtered_spans_are_dropped(self):
        result = suggest_titles("draft", word="hi", line="x" * 80, sentence="  A fine sentence  ")
        assert result == ["draft", "A fine sentence"]

    def test_duplicates_are_removed(self):
        result = suggest_titles("A day out", line="A day out", sentence=" A day out ")
        assert result == ["A day out"]

    def test_candidates_are_trimmed_and_non_empty(self):
        result = suggest_titles("  ", word="  words  ")
        assert result == ["words"]
        assert all(candidate == candidate.strip() and candidate for candidate in result)


@pytest.mark.unit
class TestContextSpans:
    """Test extraction of spans around a point."""

    TEXT = "First sentence here. Second one is longer!\nAnother line\n\nNew paragraph text"

    def test_word_at_point(self):
        spans = context_spans(self.TEXT, point=3)
        assert spans.word == "First"

    def test_line_at_point(self):
        point = self.TEXT.index("Another") + 2
        assert context_spans(self.TEXT, point).line == "Another line"

    def test_sentence_at_point(self):
        point = self.TEXT.index("Second") + 1
        assert context_spans(self.TEXT, point).sentence == "Second one is longer!"

    def test_sentence_stops_at_blank_line(self):
        point = self.TEXT.index("New") + 1
        assert context_spans(self.TEXT, point).sentence == "New paragraph text"

    def test_point_is_clamped(self):
        spans = context_spans("tiny", point=500)
        assert spans.word == "tiny"
        assert spans.line == "tiny"

    def test_no_word_on_whitespace(self):
        assert context_spans("a    b", point=4).word is None

    def test_suggestions_from_text(self):
        text = "Thoughts on gardening\nmore text"
        assert suggest_titles_from_text("garden.txt", text, point=5) == [
            "garden.txt",
            "Thoughts",
            "Thoughts on gardening",
            "Thoughts on gardening more text",
        ]
