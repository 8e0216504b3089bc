#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Argument parser construction and exit codes for the mailpost CLI."""

from __future__ import annotations

import argparse
import smtplib
import subprocess

from mailpost import __version__
from mailpost.exceptions import ConfigurationError, MailCompositionError, PostFileError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_COMMAND_ERROR = 5
EXIT_DELIVERY_ERROR = 6
EXIT_INTERRUPTED = 130

# Global flags that map directly onto BlogConfig fields
CONFIG_FLAG_FIELDS = ("recipient", "posts_directory", "converter", "transport")


def get_exit_code_for_exception(exception: BaseException) -> int:
    """Map an exception raised by a command to a CLI exit code."""
    if isinstance(exception, KeyboardInterrupt):
        return EXIT_INTERRUPTED
    if isinstance(exception, ConfigurationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, PostFileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, MailCompositionError):
        return EXIT_ERROR
    # converter or editor: missing executable or failing run
    if isinstance(exception, (subprocess.CalledProcessError, FileNotFoundError)):
        return EXIT_COMMAND_ERROR
    if isinstance(exception, (smtplib.SMTPException, OSError)):
        return EXIT_DELIVERY_ERROR
    return EXIT_ERROR


def _add_global_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--version", action="version", version=f"mailpost {__version__}")
    parser.add_argument("--config", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument(
        "-y", "--yes", action="store_true", help="Do not prompt; accept defaults and confirm everything"
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log records to this file")
    logging_group.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    overrides = parser.add_argument_group("configuration overrides")
    overrides.add_argument("--recipient", help="Post-by-e-mail address of the blog")
    overrides.add_argument("--posts-directory", help="Directory holding post files")
    overrides.add_argument("--converter", help="Converter command, e.g. 'markdown'")
    overrides.add_argument(
        "--no-converter",
        dest="converter",
        action="store_const",
        const="",
        help="Disable the configured converter",
    )
    overrides.add_argument("--transport", choices=["smtp", "outbox"], help="Mail transport")


def _add_post_value_arguments(parser: argparse.ArgumentParser, with_title: bool) -> None:
    if with_title:
        parser.add_argument("--title", help="Post title (mail subject)")
    parser.add_argument("--category", help="Category shortcode value")
    parser.add_argument("--tags", help="Comma separated tags")


def create_parser() -> argparse.ArgumentParser:
    """Create the ``mailpost`` argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mailpost",
        description="Compose blog posts as text files and publish them by e-mail.",
    )
    _add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    new = subparsers.add_parser("new", help="Start a new post file")
    new.add_argument("title", nargs="?", help="Post title (prompted for when omitted)")
    _add_post_value_arguments(new, with_title=False)
    new.add_argument("--context", help="File whose name and text at --point suggest a title")
    new.add_argument("--point", type=int, default=1, help="1-indexed position in the --context file")
    new.add_argument("--edit", action="store_true", help="Open the new post in your editor")

    setup = subparsers.add_parser("setup", help="Append the shortcode block to an existing file")
    setup.add_argument("file", help="Post file")
    _add_post_value_arguments(setup, with_title=True)
    setup.add_argument("--point", type=int, help="1-indexed cursor position to restore")
    setup.add_argument("--edit", action="store_true", help="Open the post in your editor afterwards")

    send = subparsers.add_parser("send", help="Mail a post to the blog")
    send.add_argument("file", help="Post file")
    send.add_argument("--title", help="Title to use when the file name does not carry one")

    subparsers.add_parser("list", help="List post files in the posts directory")

    titles = subparsers.add_parser("titles", help="Show title suggestions")
    titles.add_argument("--context", help="File to draw suggestions from")
    titles.add_argument("--point", type=int, default=1, help="1-indexed position in the --context file")
    titles.add_argument("--name", help="Document name to suggest (default: the --context file name)")

    template = subparsers.add_parser("template", help="Print the shortcode block")
    template.add_argument("--category", default="", help="Category shortcode value")
    template.add_argument("--tags", help="Tags (default: configured default tags)")

    convert = subparsers.add_parser("convert", help="Print the message body a post would be sent with")
    convert.add_argument("file", help="Post file")

    config = subparsers.add_parser("config", help="Show, generate or validate configuration")
    config_sub = config.add_subparsers(dest="config_command", metavar="ACTION")
    config_sub.required = True
    show = config_sub.add_parser("show", help="Print the effective configuration")
    show.add_argument("--format", choices=["toml", "yaml", "json"], default="toml")
    show.add_argument("--show-secrets", action="store_true", help="Do not mask passwords")
    generate = config_sub.add_parser("generate", help="Write a starter configuration file")
    generate.add_argument("--format", choices=["toml", "yaml", "json"], default="toml")
    generate.add_argument("--out", help="Output path (default: stdout)")
    validate = config_sub.add_parser("validate", help="Check a configuration file")
    validate.add_argument("path", help="Configuration file to check")

    return parser
