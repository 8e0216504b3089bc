#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailpost/cli/commands/config.py
"""Configuration management commands for the mailpost CLI.

``config show`` prints the effective configuration after merging file,
environment and flags; ``config generate`` writes a starter file;
``config validate`` checks a file without running anything.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from mailpost.cli.builder import EXIT_VALIDATION_ERROR
from mailpost.cli.config import build_config, get_config_search_paths, load_config_file
from mailpost.config import BlogConfig
from mailpost.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Fields written by ``config generate`` even though they default to None
_STARTER_PLACEHOLDERS = {
    "posts_directory": "~/blog/posts",
    "recipient": "secret-address@post.example.com",
    "categories": ["General"],
}


def _format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        return "[" + ", ".join(_format_toml_value(item) for item in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


def format_config(data: Mapping[str, Any], fmt: str) -> str:
    """Render a flat configuration mapping as TOML, YAML or JSON."""
    if fmt == "json":
        return json.dumps(dict(data), indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)
    return "".join(f"{key} = {_format_toml_value(value)}\n" for key, value in data.items())


def starter_config() -> Dict[str, Any]:
    """Defaults plus placeholders for the values every user has to set."""
    data = BlogConfig().to_dict()
    data.pop("smtp_password", None)
    for key, value in _STARTER_PLACEHOLDERS.items():
        data[key] = value
    return {name: data[name] for name in BlogConfig.field_names() if name in data}


def handle_config_command(parsed_args: argparse.Namespace, overrides: Mapping[str, Any]) -> int:
    """Dispatch ``config show|generate|validate``."""
    action = parsed_args.config_command

    if action == "generate":
        text = format_config(starter_config(), parsed_args.format)
        if parsed_args.out:
            Path(parsed_args.out).write_text(text, encoding="utf-8")
            print(f"Wrote {parsed_args.out}")
        else:
            print(text, end="")
        return 0

    if action == "validate":
        try:
            BlogConfig.from_mapping(load_config_file(parsed_args.path))
        except ConfigurationError as e:
            print(f"Invalid: {e}")
            return EXIT_VALIDATION_ERROR
        print(f"{parsed_args.path} is valid")
        return 0

    config = build_config(parsed_args.config, cli_overrides=overrides)
    if parsed_args.format == "toml":
        searched = ", ".join(str(path) for path in get_config_search_paths())
        print(f"# searched: {searched}")
    print(format_config(config.to_dict(include_secrets=parsed_args.show_secrets), parsed_args.format), end="")
    return 0
