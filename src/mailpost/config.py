#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration for composing and sending posts.

``BlogConfig`` is built once at startup (usually by
:func:`mailpost.cli.config.build_config`) and passed to every operation.
It is frozen: operations read it but never change it, and variants are made
with :meth:`CloneFrozenMixin.create_updated`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mailpost.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_IS_TAG,
    DEFAULT_CONVERTER,
    DEFAULT_CUTOFF_MARKER,
    DEFAULT_OUTBOX_DIRECTORY,
    DEFAULT_RECIPIENT,
    DEFAULT_SMTP_HOST,
    DEFAULT_SMTP_PORT,
    DEFAULT_SMTP_STARTTLS,
    DEFAULT_SMTP_TIMEOUT,
    DEFAULT_TAGS,
    DEFAULT_TRANSPORT,
    FALSE_VALUES,
    TRUE_VALUES,
    TransportType,
)
from mailpost.exceptions import ConfigurationError

_TRANSPORTS = ("smtp", "outbox")

_STRING_FIELDS = ("recipient", "default_tags", "cutoff_marker", "transport", "smtp_host")
_OPTIONAL_STRING_FIELDS = ("converter", "sender", "smtp_username", "smtp_password", "editor")
_BOOL_FIELDS = ("category_is_tag", "smtp_starttls")


def _type_error(name: str, value: Any, expected: str) -> ConfigurationError:
    return ConfigurationError(
        f"{name} must be {expected}, got {type(value).__name__} {value!r}",
        parameter_name=name,
        parameter_value=value,
    )


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise _type_error(name, value, "a boolean")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BlogConfig(CloneFrozenMixin):
    """Settings shared by every post operation.

    Parameters
    ----------
    posts_directory : Path or None, default None
        Directory holding post files. ``None`` means the current directory.
    recipient : str
        The blog's post-by-e-mail address.
    categories : tuple of str
        Known categories, offered as completions when prompting.
    default_tags : str
        Tags proposed for new posts.
    category_is_tag : bool, default False
        Repeat the category in the ``[tags ...]`` shortcode.
    converter : str or None, default None
        Command line of a text converter (e.g. ``"markdown"``). When set, the
        post body is piped through it before sending.
    cutoff_marker : str
        Line separating post content from the shortcode block when a
        converter is configured.
    transport : {"smtp", "outbox"}, default "smtp"
        How composed messages are delivered.
    sender : str or None
        ``From`` address. Defaults to ``smtp_username`` when unset.
    smtp_host, smtp_port, smtp_username, smtp_password, smtp_starttls, smtp_timeout
        SMTP connection settings.
    outbox_directory : Path
        Where the ``outbox`` transport writes ``.eml`` files.
    editor : str or None
        Editor command used by ``--edit``; falls back to ``$VISUAL``/``$EDITOR``.

    """

    posts_directory: Path | None = field(
        default=None,
        metadata={"help": "Directory for post files (default: current directory)", "type": Path},
    )
    recipient: str = field(
        default=DEFAULT_RECIPIENT,
        metadata={"help": "Post-by-e-mail address of the blog"},
    )
    categories: tuple[str, ...] = field(
        default=DEFAULT_CATEGORIES,
        metadata={"help": "Known categories offered as completions"},
    )
    default_tags: str = field(
        default=DEFAULT_TAGS,
        metadata={"help": "Default tags for new posts"},
    )
    category_is_tag: bool = field(
        default=DEFAULT_CATEGORY_IS_TAG,
        metadata={"help": "Also add the category to the tags shortcode"},
    )
    converter: str | None = field(
        default=DEFAULT_CONVERTER,
        metadata={"help": "Command converting the post body (e.g. 'markdown')"},
    )
    cutoff_marker: str = field(
        default=DEFAULT_CUTOFF_MARKER,
        metadata={"help": "Line separating content from shortcodes before conversion"},
    )
    transport: TransportType = field(
        default=DEFAULT_TRANSPORT,
        metadata={"help": "Mail transport: smtp or outbox"},
    )
    sender: str | None = field(default=None, metadata={"help": "From address for outgoing posts"})
    smtp_host: str = field(default=DEFAULT_SMTP_HOST, metadata={"help": "SMTP server host"})
    smtp_port: int = field(default=DEFAULT_SMTP_PORT, metadata={"help": "SMTP server port", "type": int})
    smtp_username: str | None = field(default=None, metadata={"help": "SMTP login name"})
    smtp_password: str | None = field(
        default=None,
        metadata={"help": "SMTP password (prefer the MAILPOST_SMTP_PASSWORD variable)", "secret": True},
    )
    smtp_starttls: bool = field(default=DEFAULT_SMTP_STARTTLS, metadata={"help": "Upgrade SMTP with STARTTLS"})
    smtp_timeout: float = field(
        default=DEFAULT_SMTP_TIMEOUT, metadata={"help": "SMTP timeout in seconds", "type": float}
    )
    outbox_directory: Path = field(
        default=Path(DEFAULT_OUTBOX_DIRECTORY),
        metadata={"help": "Directory for the outbox transport", "type": Path},
    )
    editor: str | None = field(default=None, metadata={"help": "Editor command for --edit"})

    def __post_init__(self) -> None:
        """Normalize collection and path fields and validate values.

        Raises
        ------
        ConfigurationError
            If a field has the wrong type or is outside its valid range.

        """
        for name in _STRING_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise _type_error(name, getattr(self, name), "a string")
        for name in _OPTIONAL_STRING_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise _type_error(name, value, "a string")
        for name in _BOOL_FIELDS:
            object.__setattr__(self, name, _as_bool(name, getattr(self, name)))
        if isinstance(self.smtp_port, bool) or not isinstance(self.smtp_port, int):
            raise _type_error("smtp_port", self.smtp_port, "an integer")
        if isinstance(self.smtp_timeout, bool) or not isinstance(self.smtp_timeout, (int, float)):
            raise _type_error("smtp_timeout", self.smtp_timeout, "a number")

        if isinstance(self.categories, str):
            object.__setattr__(self, "categories", (self.categories,))
        elif isinstance(self.categories, (list, tuple)):
            object.__setattr__(self, "categories", tuple(self.categories))
        else:
            raise _type_error("categories", self.categories, "a list of strings")
        if not all(isinstance(category, str) for category in self.categories):
            raise _type_error("categories", self.categories, "a list of strings")

        for name in ("posts_directory", "outbox_directory"):
            value = getattr(self, name)
            if value is None and name == "posts_directory":
                continue
            if not isinstance(value, (str, Path)):
                raise _type_error(name, value, "a path")
            if not isinstance(value, Path):
                object.__setattr__(self, name, Path(value).expanduser())
        if self.converter is not None and not self.converter.strip():
            object.__setattr__(self, "converter", None)

        if self.transport not in _TRANSPORTS:
            raise ConfigurationError(
                f"transport must be one of {', '.join(_TRANSPORTS)}, got {self.transport!r}",
                parameter_name="transport",
                parameter_value=self.transport,
            )
        if not 0 < self.smtp_port < 65536:
            raise ConfigurationError(
                f"smtp_port must be between 1 and 65535, got {self.smtp_port}",
                parameter_name="smtp_port",
                parameter_value=self.smtp_port,
            )
        if self.smtp_timeout <= 0:
            raise ConfigurationError(
                f"smtp_timeout must be positive, got {self.smtp_timeout}",
                parameter_name="smtp_timeout",
                parameter_value=self.smtp_timeout,
            )
        if not self.cutoff_marker or "\n" in self.cutoff_marker:
            raise ConfigurationError(
                "cutoff_marker must be a single non-empty line",
                parameter_name="cutoff_marker",
                parameter_value=self.cutoff_marker,
            )

    @property
    def converter_enabled(self) -> bool:
        """Whether posts are piped through a converter before sending."""
        return self.converter is not None

    @property
    def posts_root(self) -> Path:
        """Directory post files live in, resolving ``None`` to the cwd."""
        return self.posts_directory if self.posts_directory is not None else Path.cwd()

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of all configuration fields, in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BlogConfig":
        """Build a configuration from a loaded config file or merged mapping.

        Keys may use dashes or underscores. Unknown keys are rejected so that
        typos in config files do not silently fall back to defaults.

        Raises
        ------
        ConfigurationError
            If a key is unknown or a value is invalid.

        """
        known = set(cls.field_names())
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ConfigurationError(
                    f"Unknown configuration key: {key!r}", parameter_name=str(key), parameter_value=value
                )
            kwargs[name] = value
        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}", original_error=e) from e

    def to_dict(self, include_secrets: bool = False) -> dict[str, Any]:
        """Serialize to config-file friendly primitives.

        ``None`` values are omitted. Secret fields are masked unless
        ``include_secrets`` is true.
        """
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.metadata.get("secret") and not include_secrets:
                value = "********"
            elif isinstance(value, Path):
                value = str(value)
            elif isinstance(value, tuple):
                value = list(value)
            result[f.name] = value
        return result
