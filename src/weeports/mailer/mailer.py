"""Mailer - Sends the report as a plain-text email."""

from __future__ import annotations

import smtplib
from datetime import date
from email.mime.text import MIMEText
from email.utils import formatdate

from weeports.logging import get_logger, truncate_output
from weeports.mailer.exceptions import DeliveryError

logger = get_logger("mailer")

SMTPS_PORT = 465


def subject_for(today: date) -> str:
    """Subject line for the report sent on ``today``."""
    return f"Weekly report ({today.isoformat()})"


class Mailer:
    """Delivers one message to one recipient over SMTP.

    Uses implicit TLS on port 465, otherwise upgrades with STARTTLS when
    the server offers it. The SMTP username is used as sender address.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    def build_message(self, recipient: str, body: str, today: date) -> MIMEText:
        """Compose the message.

        Args:
            recipient: Destination address.
            body: Report text, already using CRLF line endings.
            today: Run date shown in the subject.

        Returns:
            A text/plain utf-8 message with From, To, Subject and Date set.
        """
        msg = MIMEText(body, "plain", "utf-8")
        msg["From"] = self.username
        msg["To"] = recipient
        msg["Subject"] = subject_for(today)
        msg["Date"] = formatdate(localtime=True)
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.port == SMTPS_PORT:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    def _starttls(self, server: smtplib.SMTP) -> None:
        if self.port == SMTPS_PORT:
            return
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls()
            server.ehlo()

    def send(self, recipient: str, body: str, today: date) -> MIMEText:
        """Send the report.

        Returns:
            The message that was sent.

        Raises:
            DeliveryError: If the SMTP exchange fails.
        """
        message = self.build_message(recipient, body, today)
        logger.info("Sending report to %s via %s:%d", recipient, self.host, self.port)
        try:
            with self._connect() as server:
                self._starttls(server)
                server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send report to %s: %s", recipient, e)
            raise DeliveryError(f"Failed to send report to {recipient}: {e}") from e

        logger.info("Email sent: %s", truncate_output(body))
        return message
