"""Test utilities for the mailpost test suite.

Scripted stand-ins for the interactive pieces: a prompt provider that
replays fixed answers and a mail composer that records every call.
"""

from collections import deque
from email.message import EmailMessage
from typing import Iterable, Sequence

from mailpost.mail import BaseMailComposer


class ScriptedPromptProvider:
    """Prompt provider answering from fixed scripts.

    ``answers`` feed :meth:`ask` in order; ``None`` in the script means
    "accept the default". ``confirmations`` feed :meth:`confirm`. Running out
    of scripted answers fails the test loudly.
    """

    def __init__(self, answers: Iterable[str | None] = (), confirmations: Iterable[bool] = ()):
        self.answers = deque(answers)
        self.confirmations = deque(confirmations)
        self.questions: list[tuple[str, str | None, list[str]]] = []
        self.confirm_questions: list[str] = []

    def ask(self, question: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
        self.questions.append((question, default, list(choices or [])))
        if not self.answers:
            raise AssertionError(f"Unexpected question: {question}")
        answer = self.answers.popleft()
        return (default or "") if answer is None else answer

    def confirm(self, question: str, default: bool = False) -> bool:
        self.confirm_questions.append(question)
        if not self.confirmations:
            raise AssertionError(f"Unexpected confirmation: {question}")
        return self.confirmations.popleft()


class RecordingMailComposer(BaseMailComposer):
    """Mail composer that keeps delivered messages and the call sequence."""

    def __init__(self, sender: str | None = "author@example.com"):
        super().__init__(sender=sender)
        self.calls: list[str] = []
        self.delivered: list[EmailMessage] = []

    def open(self, recipient, subject):
        self.calls.append("open")
        return super().open(recipient, subject)

    def insert(self, composition, body):
        self.calls.append("insert")
        super().insert(composition, body)

    def send(self, composition):
        self.calls.append("send")
        super().send(composition)

    def deliver(self, message: EmailMessage) -> None:
        self.delivered.append(message)
