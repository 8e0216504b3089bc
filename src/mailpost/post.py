#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Posts, their state, and their files.

A :class:`Post` pairs the text the user is writing with an optional title
binding. The title is bound when the post is initialized, which also
appends the shortcode block. A post is *configured*, and ready to send
without confirmation, once it has both a title and a ``[status ...]``
shortcode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from mailpost.config import BlogConfig
from mailpost.constants import CONVERTER_SUFFIX, POST_SUFFIX, STATUS_TOKEN
from mailpost.exceptions import PostFileError, PostNotFoundError
from mailpost.prompts import PromptProvider
from mailpost.shortcodes import build_shortcode_block

logger = logging.getLogger(__name__)


@dataclass
class Post:
    """A post being composed.

    Parameters
    ----------
    content : str
        Full text of the post, shortcode block included.
    title : str or None
        Title binding, set when the post is initialized. Used as the mail
        subject.
    point : int
        1-indexed cursor position within ``content``.
    path : Path or None
        File backing the post, if any.

    """

    content: str = ""
    title: str | None = None
    point: int = 1
    path: Path | None = None

    @property
    def name(self) -> str:
        """Display name: the file name, else the title, else ``"untitled"``."""
        if self.path is not None:
            return self.path.name
        return self.title or "untitled"

    def goto(self, point: int) -> None:
        """Move the cursor, clamped to the bounds of the content."""
        self.point = min(max(point, 1), len(self.content) + 1)

    def line_number(self) -> int:
        """1-indexed line the cursor is on."""
        return self.content.count("\n", 0, self.point - 1) + 1


def is_configured(post: Post) -> bool:
    """Return True when ``post`` has a title binding and a status shortcode."""
    return post.title is not None and STATUS_TOKEN in post.content


def _append_block(content: str, block: str) -> str:
    if content and not content.endswith("\n"):
        content += "\n"
    if content.strip():
        content += "\n"
    return f"{content}{block}\n"


def initialize_post(
    post: Post,
    title: str,
    category: str,
    tags: str,
    config: BlogConfig,
    prompts: PromptProvider,
    point: int | None = None,
) -> bool:
    """Bind ``title`` to ``post`` and append the shortcode block.

    If the post is already configured the user is asked first; a second
    block is appended when they agree.

    Parameters
    ----------
    post : Post
        Post to initialize in place.
    title : str
        Title to bind.
    category, tags : str
        Values for the ``[category ...]`` and ``[tags ...]`` shortcodes.
    config : BlogConfig
        Active configuration.
    prompts : PromptProvider
        Used for the confirmation on already configured posts.
    point : int, optional
        Cursor position to restore afterwards. Defaults to the post's
        current cursor.

    Returns
    -------
    bool
        False when the user declined, in which case the post is unchanged.

    """
    if is_configured(post) and not prompts.confirm(f"{post.name} is already set up as a post. Add another block?"):
        logger.info("Left %s unchanged", post.name)
        return False

    restore_to = post.point if point is None else point
    post.title = title
    post.content = _append_block(post.content, build_shortcode_block(category, tags, config))
    post.goto(restore_to)
    logger.debug("Initialized %s with title %r", post.name, title)
    return True


# =============================================================================
# Storage
# =============================================================================


def post_extension(config: BlogConfig) -> str:
    """File extension of post files, e.g. ``"post"`` or ``"post.md"``."""
    if config.converter_enabled:
        return f"{POST_SUFFIX}.{CONVERTER_SUFFIX}"
    return POST_SUFFIX


def _safe_stem(title: str) -> str:
    stem = title.strip().replace("/", "-").replace("\\", "-")
    if not stem or stem in (".", ".."):
        raise PostFileError(f"Cannot derive a file name from title {title!r}")
    return stem


def post_path(config: BlogConfig, title: str) -> Path:
    """Path of the file for a post titled ``title``."""
    return config.posts_root / f"{_safe_stem(title)}.{post_extension(config)}"


def title_from_path(path: Path) -> str | None:
    """Title encoded in a post file name, or None for other files."""
    name = path.name
    for suffix in (f".{POST_SUFFIX}.{CONVERTER_SUFFIX}", f".{POST_SUFFIX}"):
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return None


def load_post(path: Path | str, title: str | None = None) -> Post:
    """Read a post from ``path``.

    The title binding is ``title`` when given, else the title encoded in the
    file name (see :func:`title_from_path`). Files not named like posts have
    no title binding.

    Raises
    ------
    PostNotFoundError
        If ``path`` does not exist.
    PostFileError
        If the file cannot be read.

    """
    path = Path(path)
    if not path.exists():
        raise PostNotFoundError(str(path))
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PostFileError(f"Cannot read post file {path}: {e}", file_path=str(path), original_error=e) from e
    return Post(content=content, title=title if title is not None else title_from_path(path), path=path)


def save_post(post: Post, path: Path | str | None = None) -> Path:
    """Write the post's content to ``path`` (default: ``post.path``).

    Raises
    ------
    PostFileError
        If no path is known or writing fails.

    """
    target = Path(path) if path is not None else post.path
    if target is None:
        raise PostFileError(f"No file to save {post.name} to")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(post.content, encoding="utf-8")
    except OSError as e:
        raise PostFileError(f"Cannot write post file {target}: {e}", file_path=str(target), original_error=e) from e
    post.path = target
    logger.info("Saved %s", target)
    return target


def iter_post_files(config: BlogConfig) -> Iterator[Path]:
    """Yield post files in the posts directory, sorted by name."""
    root = config.posts_root
    if not root.is_dir():
        return
    for path in sorted(root.iterdir()):
        if path.is_file() and title_from_path(path) is not None:
            yield path


def list_posts(config: BlogConfig) -> list[Post]:
    """Load every post file in the posts directory."""
    return [load_post(path) for path in iter_post_files(config)]
