"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging verification links for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification links to stdout.
    """

    def send_verification_link(self, email: str, link: str) -> None:
        """
        Log verification link to console (simulates email delivery).

        The link is logged at INFO level to be visible in container logs.

        Args:
            email: Recipient email address (normalized by domain layer)
            link: Verification URL containing the token
        """
        logger.info("[VERIFICATION] Email: %s Link: %s", email, link)
