"""Outbound mail: who gets it and how it is sent."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import List, Optional, Protocol

from bettermail.config import Settings, settings
from bettermail.errors import TransportError
from bettermail.schemas import Notification

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 30


class Transport(Protocol):
    def send(self, notification: Notification) -> None:
        ...


class RecipientPolicy:
    """Commit mail goes to the team list, or to one developer in dev mode."""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    def recipients(self) -> List[str]:
        if self.config.dev_mode:
            return [self.config.dev_recipient]
        return [self.config.recipient]


def build_message(notification: Notification) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = notification.sender_address
    msg["To"] = ", ".join(notification.recipients)
    msg["Subject"] = notification.subject
    msg.set_content("This message requires an HTML-capable mail client.")
    msg.add_alternative(notification.html_body, subtype="html")
    return msg


class SmtpTransport:
    """Sends notifications through an SMTP relay."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
    ):
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.user = settings.smtp_user if user is None else user
        self.password = settings.smtp_password if password is None else password

    def send(self, notification: Notification) -> None:
        msg = build_message(notification)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=SMTP_TIMEOUT_SECONDS) as server:
                if self.user and self.password:
                    server.starttls()
                    server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportError(f"could not send mail via {self.host}: {exc}") from exc
        logger.info("Sent mail to %s", notification.recipients[0])
