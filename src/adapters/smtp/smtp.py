"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers verification links through an SMTP relay using the
account credentials from settings.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import MailDeliveryFailed

logger = logging.getLogger(__name__)

SUBJECT = "Verify your email"


def build_verification_message(sender: str, recipient: str, link: str) -> EmailMessage:
    """Compose the plain-text verification email."""
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = SUBJECT
    message.set_content(f"Please verify your email by clicking the following link: {link}\n")
    return message


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    A new connection is opened per message; nothing is shared between
    requests.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send_verification_link(self, email: str, link: str) -> None:
        """
        Send the verification link to the recipient.

        Raises:
            MailDeliveryFailed: On any SMTP or socket error
        """
        message = build_verification_message(self._sender, email, link)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._username and self._password:
                    smtp.login(self._username, self._password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s via %s:%s failed: %s", email, self._host, self._port, e)
            raise MailDeliveryFailed(email) from e
