import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """IEmailSender over SMTP using aiosmtplib"""

    def __init__(
        self,
        hostname: str,
        port: int,
        from_address: str,
        from_name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10,
    ):
        self.hostname = hostname
        self.port = port
        self.from_address = from_address
        self.from_name = from_name
        self.username = username
        self.password = password
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, text: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = (
            f'"{self.from_name}" <{self.from_address}>' if self.from_name else self.from_address
        )
        msg["To"] = to
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    async def send(self, to: str, subject: str, text: str, html: str) -> bool:
        msg = self._build_message(to, subject, text, html)

        # Port 465 speaks TLS from the start, everything else upgrades via STARTTLS
        use_tls_direct = self.port == 465

        try:
            await aiosmtplib.send(
                msg,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=use_tls_direct,
                start_tls=not use_tls_direct,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error(f"Failed to send email to {to}: {exc}")
            return False

        logger.info(f"Email '{subject}' sent to {to}")
        return True


class LoggingEmailSender(IEmailSender):
    """Development transport: writes the message to the log instead of sending it"""

    async def send(self, to: str, subject: str, text: str, html: str) -> bool:
        logger.warning(f"MAIL_BACKEND=log, not sending. To: {to} Subject: {subject}\n{text}")
        return True
