#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Mail composers that deliver a post to the blog's post-by-e-mail address.

Every composer follows the same three-step contract::

    composition = composer.open(recipient, subject)
    composer.insert(composition, body)
    composer.send(composition)

Steps must happen in this order, once each. Delivery errors from the
transport (``smtplib.SMTPException``, ``OSError``) are not caught here.
"""

from __future__ import annotations

import logging
import re
import smtplib
from dataclasses import dataclass, field
from datetime import datetime
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from pathlib import Path
from typing import Protocol, runtime_checkable

from mailpost.config import BlogConfig
from mailpost.exceptions import ConfigurationError, MailCompositionError

logger = logging.getLogger(__name__)


@dataclass
class Composition:
    """A message being composed.

    Attributes
    ----------
    message : EmailMessage
        The message, with addressing headers set by ``open``.
    body_inserted : bool
        Whether ``insert`` has been called.
    sent : bool
        Whether ``send`` has completed.

    """

    message: EmailMessage = field(default_factory=EmailMessage)
    body_inserted: bool = False
    sent: bool = False

    @property
    def recipient(self) -> str:
        return str(self.message["To"])

    @property
    def subject(self) -> str:
        return str(self.message["Subject"])


@runtime_checkable
class MailComposer(Protocol):
    """Open, fill and send a message."""

    def open(self, recipient: str, subject: str) -> Composition:
        """Start a new message addressed to ``recipient``."""
        ...

    def insert(self, composition: Composition, body: str) -> None:
        """Set the body of an opened message."""
        ...

    def send(self, composition: Composition) -> None:
        """Deliver a message whose body has been inserted."""
        ...


class BaseMailComposer:
    """Composition bookkeeping shared by the concrete composers.

    Subclasses implement :meth:`deliver`.
    """

    def __init__(self, sender: str | None = None):
        self.sender = sender

    def open(self, recipient: str, subject: str) -> Composition:
        if not recipient or not recipient.strip():
            raise ConfigurationError(
                "No recipient configured; set 'recipient' to the blog's post-by-e-mail address",
                parameter_name="recipient",
                parameter_value=recipient,
            )
        message = EmailMessage()
        message["To"] = recipient.strip()
        message["Subject"] = subject
        if self.sender:
            message["From"] = self.sender
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid()
        logger.debug("Opened message to %s: %s", recipient, subject)
        return Composition(message=message)

    def insert(self, composition: Composition, body: str) -> None:
        if composition.sent:
            raise MailCompositionError("Cannot change the body of a message that was already sent", step="insert")
        composition.message.set_content(body)
        composition.body_inserted = True

    def send(self, composition: Composition) -> None:
        if composition.sent:
            raise MailCompositionError("Message was already sent", step="send")
        if not composition.body_inserted:
            raise MailCompositionError("Insert a body before sending", step="send")
        self.deliver(composition.message)
        composition.sent = True
        logger.info("Sent %r to %s", composition.subject, composition.recipient)

    def deliver(self, message: EmailMessage) -> None:
        raise NotImplementedError


class SmtpMailComposer(BaseMailComposer):
    """Deliver messages through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str | None = None,
        username: str | None = None,
        password: str | None = None,
        starttls: bool = False,
        timeout: float = 30.0,
    ):
        super().__init__(sender=sender or username)
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.starttls = starttls
        self.timeout = timeout

    def deliver(self, message: EmailMessage) -> None:
        logger.debug("Connecting to %s:%s", self.host, self.port)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.starttls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)


def _outbox_filename(message: EmailMessage) -> str:
    subject = re.sub(r"[^\w.-]+", "-", str(message["Subject"] or "post")).strip("-") or "post"
    return f"{datetime.now():%Y%m%d-%H%M%S-%f}-{subject[:50]}.eml"


class OutboxMailComposer(BaseMailComposer):
    """Write messages as ``.eml`` files instead of delivering them."""

    def __init__(self, directory: Path | str, sender: str | None = None):
        super().__init__(sender=sender)
        self.directory = Path(directory)
        self.delivered: list[Path] = []

    def deliver(self, message: EmailMessage) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / _outbox_filename(message)
        target.write_bytes(message.as_bytes())
        self.delivered.append(target)
        logger.info("Wrote %s", target)


def create_mail_composer(config: BlogConfig) -> BaseMailComposer:
    """Build the composer selected by ``config.transport``."""
    if config.transport == "outbox":
        return OutboxMailComposer(config.outbox_directory, sender=config.sender)
    return SmtpMailComposer(
        host=config.smtp_host,
        port=config.smtp_port,
        sender=config.sender,
        username=config.smtp_username,
        password=config.smtp_password,
        starttls=config.smtp_starttls,
        timeout=config.smtp_timeout,
    )
