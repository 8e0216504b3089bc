"""mailpost - compose blog posts as text files and publish them by e-mail.

mailpost helps write a post as plain text, append the block of shortcodes
understood by post-by-e-mail blog handlers (category, tags, status, ...) and
send the result to the blog's secret address. Posts can optionally be piped
through a converter such as ``markdown`` before they are sent.

Examples
--------
Set up a post and look at its shortcodes:

    >>> from mailpost import BlogConfig, Post, initialize_post, is_configured
    >>> from mailpost.prompts import AssumeYesPromptProvider
    >>> config = BlogConfig(recipient="secret123@post.example.com")
    >>> post = Post(content="Hello!\\n")
    >>> initialize_post(post, "Greetings", "General", "intro", config, AssumeYesPromptProvider())
    True
    >>> is_configured(post)
    True

See Also
--------
mailpost.workflow : new/setup/send operations
mailpost.cli : the ``mailpost`` command

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.3.0"

from mailpost.config import BlogConfig
from mailpost.conversion import convert_text, find_end_of_post, reflow, split_at_cutoff
from mailpost.exceptions import (
    ConfigurationError,
    MailCompositionError,
    MailPostError,
    PostFileError,
    PostNotFoundError,
)
from mailpost.post import Post, initialize_post, is_configured, load_post, post_path, save_post
from mailpost.shortcodes import build_shortcode_block
from mailpost.titles import suggest_titles
from mailpost.workflow import PostWorkflow

__all__ = [
    "__version__",
    "BlogConfig",
    "ConfigurationError",
    "MailCompositionError",
    "MailPostError",
    "Post",
    "PostFileError",
    "PostNotFoundError",
    "PostWorkflow",
    "build_shortcode_block",
    "convert_text",
    "find_end_of_post",
    "initialize_post",
    "is_configured",
    "load_post",
    "post_path",
    "reflow",
    "save_post",
    "split_at_cutoff",
    "suggest_titles",
]
