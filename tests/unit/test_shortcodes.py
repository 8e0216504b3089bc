"""Unit tests for the shortcode block."""

import pytest

from mailpost.config import BlogConfig
from mailpost.shortcodes import build_shortcode_block, format_tags

EXPECTED_FOOTER = """[status draft]
-- 
Anything after the signature line "-- " will not appear in the post.
Status can be publish, pending, or draft.
[slug some-url-name]
[excerpt]some excerpt[/excerpt]
[delay +1 hour]
[comments on | off]
[password secret-password]"""


@pytest.mark.unit
class TestBuildShortcodeBlock:
    """Test rendering of the shortcode block."""

    def test_block_without_converter(self):
        block = build_shortcode_block("Travel", "hiking,alps", BlogConfig())
        assert block == "[category Travel]\n[tags hiking,alps]\n" + EXPECTED_FOOTER

    def test_marker_leads_block_with_converter(self):
        config = BlogConfig(converter="markdown", cutoff_marker="<!-- cut -->")
        lines = build_shortcode_block("Travel", "hiking", config).split("\n")
        assert lines[0] == "<!-- cut -->"
        assert lines[1] == "[category Travel]"

    def test_marker_absent_without_converter(self):
        block = build_shortcode_block("Travel", "hiking", BlogConfig(cutoff_marker="<!-- cut -->"))
        assert "<!-- cut -->" not in block

    @pytest.mark.parametrize("category_is_tag", [True, False])
    def test_exactly_one_status_line(self, category_is_tag):
        config = BlogConfig(category_is_tag=category_is_tag, converter="markdown")
        lines = build_shortcode_block("News", "a,b", config).split("\n")
        assert lines.count("[status draft]") == 1

    def test_category_also_tag(self):
        block = build_shortcode_block("News", "a,b", BlogConfig(category_is_tag=True))
        assert "[category News]" in block
        assert "[tags a,b,News]" in block

    def test_signature_line_keeps_trailing_space(self):
        assert "\n-- \n" in build_shortcode_block("News", "a", BlogConfig())

    def test_no_trailing_newline(self):
        assert not build_shortcode_block("News", "a", BlogConfig()).endswith("\n")


@pytest.mark.unit
class TestFormatTags:
    """Test the tags shortcode value."""

    def test_tags_unchanged_when_flag_off(self):
        assert format_tags("a,b", "News", False) == "a,b"

    def test_category_appended(self):
        assert format_tags("a,b", "News", True) == "a,b,News"

    def test_no_leading_comma_for_empty_tags(self):
        assert format_tags("", "News", True) == "News"

    def test_empty_category_not_appended(self):
        assert format_tags("a", "", True) == "a"
