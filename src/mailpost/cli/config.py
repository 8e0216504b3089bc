#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mailpost CLI.

Settings are resolved from, lowest to highest priority:

1. ``BlogConfig`` defaults
2. A configuration file: ``--config``, else ``MAILPOST_CONFIG``, else the
   first ``.mailpost.{toml,yaml,yml,json}`` (or ``pyproject.toml`` with a
   ``[tool.mailpost]`` table) found from the current directory upwards,
   else one in the home directory
3. ``MAILPOST_<FIELD>`` environment variables
4. Command-line flags
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from mailpost.config import BlogConfig
from mailpost.constants import CONFIG_FILENAMES, ENV_PREFIX, FALSE_VALUES, TRUE_VALUES
from mailpost.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mailpost]`` table of a pyproject.toml, or ``{}``.

    Raises
    ------
    ConfigurationError
        If the file is not valid TOML or the section is not a table.

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject_path}: {e}", original_error=e) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {pyproject_path}: {e}", original_error=e) from e

    section = data.get("tool", {}).get("mailpost", {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.mailpost] in {pyproject_path} must be a table, got {type(section).__name__}",
            parameter_name="tool.mailpost",
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` (default: cwd) and its parents for a config file.

    In each directory the dedicated ``.mailpost.*`` files are checked in
    order, then ``pyproject.toml`` if it has a non-empty ``[tool.mailpost]``
    table.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject = current / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _load_pyproject_section(pyproject):
                    return pyproject
            except ConfigurationError:
                logger.debug("Ignoring unreadable %s", pyproject)

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file() -> Optional[Path]:
    """Find the configuration file to use when none was named explicitly."""
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a TOML, YAML, JSON or pyproject.toml configuration file.

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed or not a mapping.

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", parameter_name="config")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json",
                parameter_name="config",
                parameter_value=str(config_path),
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}", original_error=e) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}", original_error=e) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping, got {type(data).__name__}")
    return data


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge two configuration mappings, ``override`` winning on conflicts.

    Nested mappings are merged recursively.
    """
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> tuple[Dict[str, Any], Optional[Path]]:
    """Load the configuration file with the highest priority.

    Returns
    -------
    tuple of (dict, Path or None)
        The loaded mapping (empty when no file was found) and its path.

    """
    for candidate in (explicit_path, env_var_path):
        if candidate:
            return load_config_file(candidate), Path(candidate)

    discovered = discover_config_file()
    if discovered:
        logger.debug("Using configuration file %s", discovered)
        return load_config_file(discovered), discovered
    return {}, None


def _coerce_env_value(name: str, raw: str, default: Any, declared_type: Any) -> Any:
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid boolean for {ENV_PREFIX}{name.upper()}: {raw}", parameter_name=name)
    if declared_type in (int, float):
        try:
            return declared_type(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid number for {ENV_PREFIX}{name.upper()}: {raw}", parameter_name=name, original_error=e
            ) from e
    if isinstance(default, tuple):
        return tuple(item.strip() for item in raw.split(",") if item.strip())
    return raw


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ``MAILPOST_<FIELD>`` environment variables as config values.

    List fields take comma separated values, booleans accept true/false,
    yes/no, on/off and 1/0.
    """
    environ = os.environ if environ is None else environ
    defaults = BlogConfig()
    overrides: Dict[str, Any] = {}
    for f in fields(BlogConfig):
        raw = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is None:
            continue
        overrides[f.name] = _coerce_env_value(f.name, raw, getattr(defaults, f.name), f.metadata.get("type"))
    return overrides


def build_config(
    explicit_path: Optional[str] = None,
    cli_overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BlogConfig:
    """Resolve the effective configuration for a CLI invocation.

    Parameters
    ----------
    explicit_path : str, optional
        Path given with ``--config``.
    cli_overrides : mapping, optional
        Values from command-line flags; ``None`` values are ignored.
    environ : mapping, optional
        Environment to read, defaults to ``os.environ``.

    Raises
    ------
    ConfigurationError
        If any source holds an invalid value.

    """
    environ = os.environ if environ is None else environ
    file_config, source = load_config_with_priority(explicit_path, environ.get(CONFIG_ENV_VAR))
    merged = merge_configs(file_config, env_overrides(environ))
    if cli_overrides:
        merged = merge_configs(merged, {k: v for k, v in cli_overrides.items() if v is not None})

    config = BlogConfig.from_mapping(merged)
    if source:
        logger.debug("Configuration loaded from %s", source)
    return config


def get_config_search_paths() -> list[Path]:
    """Representative config locations, in search order, for display."""
    cwd = Path.cwd()
    home = Path.home()
    paths = [cwd / name for name in CONFIG_FILENAMES]
    paths.append(cwd / "pyproject.toml")
    paths.extend(home / name for name in CONFIG_FILENAMES)
    return paths
