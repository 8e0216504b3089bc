#  Copyright (c) 2025 Tom Villani, Ph.D.
"""High-level post operations: start a post, set up a post, send a post.

:class:`PostWorkflow` ties the configuration, a prompt provider and a mail
composer together. Every method runs synchronously and either completes or
returns early when the user declines a confirmation.

Examples
--------
Compose and send a post non-interactively:

    >>> from mailpost import BlogConfig, PostWorkflow
    >>> from mailpost.prompts import AssumeYesPromptProvider
    >>> config = BlogConfig(recipient="secret123@post.example.com", transport="outbox")
    >>> workflow = PostWorkflow(config, AssumeYesPromptProvider())
    >>> post = workflow.new_post("Hello world", category="General", tags="intro")
    >>> workflow.send_post(post)
    True

"""

from __future__ import annotations

import logging

from mailpost.config import BlogConfig
from mailpost.conversion import convert_text
from mailpost.mail import MailComposer, create_mail_composer
from mailpost.post import Post, initialize_post, is_configured, load_post, post_path, save_post
from mailpost.prompts import PromptProvider
from mailpost.titles import suggest_titles_from_text

logger = logging.getLogger(__name__)


def _first_line(text: str) -> str | None:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


class PostWorkflow:
    """Interactive post operations bound to one configuration.

    Parameters
    ----------
    config : BlogConfig
        Active configuration.
    prompts : PromptProvider
        Source of answers for titles, categories, tags and confirmations.
    mailer : MailComposer, optional
        Mail composer used by :meth:`send_post`. Defaults to the composer
        selected by ``config.transport``.

    """

    def __init__(self, config: BlogConfig, prompts: PromptProvider, mailer: MailComposer | None = None):
        self.config = config
        self.prompts = prompts
        self.mailer = mailer if mailer is not None else create_mail_composer(config)

    # -------------------------------------------------------------------------
    # Prompting
    # -------------------------------------------------------------------------

    def ask_title(self, context: Post | None = None) -> str:
        """Ask for a title, suggesting ones drawn from ``context``."""
        suggestions: list[str] = []
        if context is not None:
            suggestions = suggest_titles_from_text(context.name, context.content, context.point)
        default = suggestions[0] if suggestions else None
        return self.prompts.ask("Title", default=default, choices=suggestions).strip()

    def ask_category(self) -> str:
        categories = list(self.config.categories)
        default = categories[0] if categories else None
        return self.prompts.ask("Category", default=default, choices=categories).strip()

    def ask_tags(self) -> str:
        return self.prompts.ask("Tags", default=self.config.default_tags).strip()

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def new_post(
        self,
        title: str | None = None,
        category: str | None = None,
        tags: str | None = None,
        context: Post | None = None,
    ) -> Post | None:
        """Start a post in its own file.

        Missing values are asked for. The post file is
        ``<posts_directory>/<title>.<ext>``; if it already exists its content
        is kept and the shortcode block is appended to it.

        Returns
        -------
        Post or None
            The saved post, or None when no title was given or the user
            declined to set up an existing post again.

        """
        if title is None:
            title = self.ask_title(context)
        title = title.strip()
        if not title:
            logger.warning("No title given; not creating a post")
            return None
        if category is None:
            category = self.ask_category()
        if tags is None:
            tags = self.ask_tags()

        path = post_path(self.config, title)
        if path.exists():
            logger.info("Reusing existing post file %s", path)
            post = load_post(path, title=title)
        else:
            post = Post(path=path)

        if not initialize_post(post, title, category, tags, self.config, self.prompts, point=1):
            return None
        save_post(post)
        return post

    def setup_post(
        self,
        post: Post,
        title: str | None = None,
        category: str | None = None,
        tags: str | None = None,
        point: int | None = None,
    ) -> bool:
        """Set up an existing post in place, saving it if it has a file.

        Returns
        -------
        bool
            False when the user declined or gave no title.

        """
        if title is None:
            title = post.title or self.ask_title(post)
        title = title.strip()
        if not title:
            logger.warning("No title given; leaving %s unchanged", post.name)
            return False
        if category is None:
            category = self.ask_category()
        if tags is None:
            tags = self.ask_tags()

        if not initialize_post(post, title, category, tags, self.config, self.prompts, point=point):
            return False
        if post.path is not None:
            save_post(post)
        return True

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def render_body(self, post: Post) -> str:
        """Message body for ``post``: converted when a converter is set."""
        if self.config.converter is None:
            return post.content
        return convert_text(post.content, self.config.converter, self.config.cutoff_marker)

    def send_post(self, post: Post) -> bool:
        """Mail ``post`` to the configured recipient.

        Posts that are not configured are sent only after confirmation. A
        post without a title binding gets its subject from a prompt.
        Converter and delivery errors propagate to the caller.

        Returns
        -------
        bool
            True when the message was handed to the mail composer, False when
            the user declined.

        """
        if not is_configured(post) and not self.prompts.confirm(
            f"{post.name} is not set up as a post. Send it anyway?"
        ):
            logger.info("Not sending %s", post.name)
            return False

        subject = post.title
        if subject is None:
            subject = self.prompts.ask("Subject", default=_first_line(post.content)).strip()

        body = self.render_body(post)

        composition = self.mailer.open(self.config.recipient, subject)
        self.mailer.insert(composition, body)
        self.mailer.send(composition)
        return True
