#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailpost/cli/commands/posts.py
"""Handlers for the commands that create, set up, send and list posts."""

import argparse
import logging

from rich.console import Console
from rich.table import Table

from mailpost.config import BlogConfig
from mailpost.editor import open_in_editor, resolve_editor
from mailpost.post import Post, is_configured, list_posts, load_post, title_from_path
from mailpost.prompts import PromptProvider
from mailpost.workflow import PostWorkflow

logger = logging.getLogger(__name__)


def _edit(post: Post, config: BlogConfig) -> None:
    if post.path is None:
        return
    open_in_editor(post.path, post.line_number(), resolve_editor(config))


def handle_new_command(parsed_args: argparse.Namespace, config: BlogConfig, prompts: PromptProvider) -> int:
    """Handle ``mailpost new``."""
    context = None
    if parsed_args.context:
        context = load_post(parsed_args.context)
        context.goto(parsed_args.point)

    workflow = PostWorkflow(config, prompts)
    post = workflow.new_post(
        title=parsed_args.title,
        category=parsed_args.category,
        tags=parsed_args.tags,
        context=context,
    )
    if post is None:
        return 0

    print(post.path)
    if parsed_args.edit:
        _edit(post, config)
    return 0


def handle_setup_command(parsed_args: argparse.Namespace, config: BlogConfig, prompts: PromptProvider) -> int:
    """Handle ``mailpost setup``: append shortcodes to an existing file."""
    post = load_post(parsed_args.file, title=parsed_args.title)
    if parsed_args.point is not None:
        post.goto(parsed_args.point)

    workflow = PostWorkflow(config, prompts)
    if not workflow.setup_post(post, title=parsed_args.title, category=parsed_args.category, tags=parsed_args.tags):
        return 0

    if post.path is not None and title_from_path(post.path) != post.title:
        # the title binding only survives in post file names
        logger.warning("Pass --title %r when sending %s", post.title, post.path)
    if parsed_args.edit:
        _edit(post, config)
    return 0


def handle_send_command(parsed_args: argparse.Namespace, config: BlogConfig, prompts: PromptProvider) -> int:
    """Handle ``mailpost send``."""
    post = load_post(parsed_args.file, title=parsed_args.title)
    workflow = PostWorkflow(config, prompts)
    if workflow.send_post(post):
        print(f"Sent {post.name} to {config.recipient}")
    return 0


def handle_list_command(parsed_args: argparse.Namespace, config: BlogConfig, prompts: PromptProvider) -> int:
    """Handle ``mailpost list``: show post files and whether they are set up."""
    table = Table(title=f"Posts in {config.posts_root}")
    table.add_column("Title")
    table.add_column("File")
    table.add_column("Set up", justify="center")

    posts = list_posts(config)
    for post in posts:
        table.add_row(post.title or "", post.name, "yes" if is_configured(post) else "no")

    console = Console()
    if posts:
        console.print(table)
    else:
        console.print(f"No posts in {config.posts_root}")
    return 0
