#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Prompt providers used to ask the user for titles, categories and confirmations.

Operations never read from the terminal directly. They call a
:class:`PromptProvider`, so the CLI can prompt interactively with rich,
``--yes`` runs can answer with defaults, and tests can script the answers.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence, runtime_checkable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

logger = logging.getLogger(__name__)


@runtime_checkable
class PromptProvider(Protocol):
    """Synchronous source of answers to questions asked during an operation."""

    def ask(self, question: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
        """Ask a free-form question.

        ``choices`` are completion hints only; any answer is accepted.
        """
        ...

    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...


class RichPromptProvider:
    """Interactive prompts on the terminal, rendered with rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def ask(self, question: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
        text = escape(question)
        if choices:
            hint = ", ".join(escape(choice) for choice in choices)
            text = f"{text} [dim]({hint})[/dim]"
        if default is None:
            answer = Prompt.ask(text, console=self.console)
        else:
            answer = Prompt.ask(text, default=default, console=self.console)
        return answer.strip()

    def confirm(self, question: str, default: bool = False) -> bool:
        return Confirm.ask(escape(question), default=default, console=self.console)


class AssumeYesPromptProvider:
    """Non-interactive answers: defaults for questions, yes for confirmations."""

    def ask(self, question: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
        logger.debug("Answering %r with default %r", question, default)
        return default or ""

    def confirm(self, question: str, default: bool = False) -> bool:
        logger.info("%s yes", question)
        return True
