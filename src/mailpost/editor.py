#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Launching the user's editor on a post file."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

from mailpost.config import BlogConfig
from mailpost.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_editor(config: BlogConfig) -> str:
    """Editor command from the configuration, ``$VISUAL`` or ``$EDITOR``.

    Raises
    ------
    ConfigurationError
        If none of them is set.

    """
    editor = config.editor or os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if not editor:
        raise ConfigurationError("No editor configured; set 'editor' or the EDITOR variable", parameter_name="editor")
    return editor


def open_in_editor(path: Path, line: int, editor: str) -> None:
    """Open ``path`` in ``editor`` with the cursor on ``line``.

    Uses the ``+LINE`` argument understood by vi, emacs, nano and most
    terminal editors. Blocks until the editor exits.
    """
    argv = [*shlex.split(editor), f"+{max(line, 1)}", str(path)]
    logger.debug("Launching editor: %s", argv)
    subprocess.run(argv, check=True)
