#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailpost/cli/commands/__init__.py
"""Dispatch of parsed mailpost subcommands to their handlers."""

import argparse
import logging
from typing import Any, Mapping

from mailpost.config import BlogConfig
from mailpost.exceptions import ConfigurationError
from mailpost.prompts import PromptProvider

# Note: handlers are imported lazily so that --help does not pull in rich
# tables, smtplib and friends

logger = logging.getLogger(__name__)


def dispatch_command(
    parsed_args: argparse.Namespace,
    config: BlogConfig | None,
    prompts: PromptProvider,
    overrides: Mapping[str, Any],
) -> int | None:
    """Run the handler for ``parsed_args.command``.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments
    config : BlogConfig or None
        Effective configuration; None for the ``config`` command, which
        resolves configuration itself
    prompts : PromptProvider
        Prompt provider for interactive commands
    overrides : mapping
        Configuration values given as global flags

    Returns
    -------
    int or None
        Exit code; None means success

    """
    command = parsed_args.command
    logger.debug("Dispatching %s", command)

    if command == "config":
        from mailpost.cli.commands.config import handle_config_command

        return handle_config_command(parsed_args, overrides)

    if config is None:
        raise ConfigurationError(f"No configuration resolved for the {command} command")

    if command in ("new", "setup", "send", "list"):
        from mailpost.cli.commands import posts

        handler = {
            "new": posts.handle_new_command,
            "setup": posts.handle_setup_command,
            "send": posts.handle_send_command,
            "list": posts.handle_list_command,
        }[command]
        return handler(parsed_args, config, prompts)

    from mailpost.cli.commands import tools

    handler = {
        "titles": tools.handle_titles_command,
        "template": tools.handle_template_command,
        "convert": tools.handle_convert_command,
    }[command]
    return handler(parsed_args, config)
