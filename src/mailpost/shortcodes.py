#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shortcode block appended to every post.

The block is plain text read by the blog's post-by-e-mail handler. Only the
category and tags vary; the remaining lines are a reminder of the other
shortcodes the handler understands.
"""

from __future__ import annotations

from mailpost.config import BlogConfig
from mailpost.constants import DEFAULT_STATUS, SHORTCODE_FOOTER_LINES


def format_tags(tags: str, category: str, category_is_tag: bool) -> str:
    """Return the value of the ``[tags ...]`` shortcode."""
    if not category_is_tag or not category:
        return tags
    return f"{tags},{category}" if tags else category


def shortcode_lines(category: str, tags: str, config: BlogConfig) -> list[str]:
    """Return the lines of the shortcode block, in order."""
    lines = []
    if config.converter_enabled:
        lines.append(config.cutoff_marker)
    lines.append(f"[category {category}]")
    lines.append(f"[tags {format_tags(tags, category, config.category_is_tag)}]")
    lines.append(f"[status {DEFAULT_STATUS}]")
    lines.extend(SHORTCODE_FOOTER_LINES)
    return lines


def build_shortcode_block(category: str, tags: str, config: BlogConfig) -> str:
    """Render the shortcode block for ``category`` and ``tags``.

    The cutoff marker leads the block only when a converter is configured.
    The block has no trailing newline.
    """
    return "\n".join(shortcode_lines(category, tags, config))
