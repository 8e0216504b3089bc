"""Command-line interface for mailpost.

Environment Variable Support
----------------------------
Every configuration field can be set with ``MAILPOST_<FIELD>`` (e.g.
``MAILPOST_RECIPIENT``, ``MAILPOST_SMTP_PASSWORD``), and the configuration
file itself with ``MAILPOST_CONFIG``. Command-line flags override both.

Examples
--------
Start a post and edit it::

    $ mailpost new "Weekend in the hills" --category Travel --edit

Append shortcodes to a file you already wrote::

    $ mailpost setup notes.txt --title "Notes from the meetup"

Send it::

    $ mailpost send "Weekend in the hills.post"

Check what would be mailed with a converter::

    $ mailpost --converter markdown convert "Weekend in the hills.post.md"

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys

from mailpost.cli.builder import (
    CONFIG_FLAG_FIELDS,
    EXIT_SUCCESS,
    create_parser,
    get_exit_code_for_exception,
)
from mailpost.cli.commands import dispatch_command
from mailpost.cli.config import build_config
from mailpost.logging_utils import configure_logging
from mailpost.prompts import AssumeYesPromptProvider, PromptProvider, RichPromptProvider

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from ``--trace``, ``--verbose`` and ``--log-level``."""
    if parsed_args.trace or parsed_args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _make_prompts(parsed_args: argparse.Namespace) -> PromptProvider:
    if parsed_args.yes:
        return AssumeYesPromptProvider()
    return RichPromptProvider()


def main(args: list[str] | None = None) -> int:
    """Run the mailpost CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    overrides = {name: getattr(parsed_args, name) for name in CONFIG_FLAG_FIELDS}
    try:
        if parsed_args.command == "config":
            return dispatch_command(parsed_args, None, _make_prompts(parsed_args), overrides)
        config = build_config(parsed_args.config, cli_overrides=overrides)
        result = dispatch_command(parsed_args, config, _make_prompts(parsed_args), overrides)
    except KeyboardInterrupt as e:
        print("\nInterrupted", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        exit_code = get_exit_code_for_exception(e)
        logger.debug("Command %s failed", parsed_args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return exit_code

    return result if result is not None else EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
