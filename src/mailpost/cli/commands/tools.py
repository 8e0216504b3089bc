#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailpost/cli/commands/tools.py
"""Handlers for the read-only helper commands: titles, template, convert."""

import argparse
import sys
from pathlib import Path

from mailpost.config import BlogConfig
from mailpost.post import load_post
from mailpost.prompts import AssumeYesPromptProvider
from mailpost.shortcodes import build_shortcode_block
from mailpost.titles import suggest_titles, suggest_titles_from_text
from mailpost.workflow import PostWorkflow


def handle_titles_command(parsed_args: argparse.Namespace, config: BlogConfig) -> int:
    """Print title suggestions, one per line."""
    if parsed_args.context:
        context = load_post(parsed_args.context)
        name = parsed_args.name if parsed_args.name is not None else Path(parsed_args.context).name
        suggestions = suggest_titles_from_text(name, context.content, parsed_args.point)
    else:
        suggestions = suggest_titles(parsed_args.name)

    for suggestion in suggestions:
        print(suggestion)
    return 0


def handle_template_command(parsed_args: argparse.Namespace, config: BlogConfig) -> int:
    """Print the shortcode block for the given category and tags."""
    tags = parsed_args.tags if parsed_args.tags is not None else config.default_tags
    print(build_shortcode_block(parsed_args.category, tags, config))
    return 0


def handle_convert_command(parsed_args: argparse.Namespace, config: BlogConfig) -> int:
    """Print the body ``send`` would mail, without sending anything."""
    post = load_post(parsed_args.file)
    workflow = PostWorkflow(config, AssumeYesPromptProvider())
    sys.stdout.write(workflow.render_body(post))
    return 0
