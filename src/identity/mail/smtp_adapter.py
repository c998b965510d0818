"""SMTP mailer, selected with MAIL_ADAPTER=smtp.

Delivery goes through aiosmtplib. ``send`` is synchronous to match the mail
port, so each message runs its own short event loop.
"""

import asyncio
from email.message import EmailMessage
from email.utils import make_msgid

import aiosmtplib
import structlog

from identity.mail.port import MailPort
from shared import config

logger = structlog.get_logger(__name__)


class SmtpMailer(MailPort):
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        use_tls: bool | None = None,
    ):
        self.host = host or config.SMTP_HOST
        self.port = port or config.SMTP_PORT
        self.username = username if username is not None else config.SMTP_USERNAME
        self.password = password if password is not None else config.SMTP_PASSWORD
        self.sender = sender or config.SMTP_SENDER
        self.use_tls = config.SMTP_USE_TLS if use_tls is None else use_tls

    def send(self, to: str, subject: str, body: str) -> dict:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)

        try:
            asyncio.run(self._deliver(message))
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", to=to, host=self.host, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}

    async def _deliver(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=self.host,
            port=self.port,
            username=self.username or None,
            password=(self.password or "") if self.username else None,
            start_tls=self.use_tls,
            timeout=30,
        )
